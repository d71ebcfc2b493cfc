"""Tests for line parsing, list parsing, and duplicate aggregation."""

import pytest

from supplyorder.parsing.matcher import MatchOptions
from supplyorder.parsing.models import CatalogItem, MatchedItem, NewItem
from supplyorder.parsing.parser import aggregate, clean_name, parse_item_list, parse_line
from supplyorder.parsing.units import Unit


@pytest.fixture
def catalog():
    return [
        CatalogItem(id="i1", name="Angkor Beer (can)", unit=Unit.CAN, supplier_id="s1"),
        CatalogItem(id="i2", name="Jasmine Rice", unit=Unit.KG, supplier_id="s2"),
        CatalogItem(id="i3", name="Soda Water", unit=Unit.BT, supplier_id="s1"),
    ]


class TestCleanName:
    def test_punctuation_becomes_space(self):
        assert clean_name("bell-pepper (red)!") == "bell pepper red"

    def test_collapses_whitespace(self):
        assert clean_name("  soy   sauce ") == "soy sauce"


class TestParseLine:
    def test_matched_item_uses_catalog_unit(self, catalog):
        item = parse_line("Jasmine Rice 3 pcs", catalog)
        assert isinstance(item, MatchedItem)
        assert item.item_id == "i2"
        assert item.unit == Unit.KG

    def test_typed_unit_is_overridden(self, catalog):
        item = parse_line("2 bottles angkor beer", catalog)
        assert item == MatchedItem(item_id="i1", quantity=2, unit=Unit.CAN)

    def test_new_item_keeps_typed_unit(self):
        item = parse_line("2kg carrots", [])
        assert item == NewItem(name="carrots", quantity=2, unit=Unit.KG)

    def test_new_item_without_unit(self):
        item = parse_line("lemongrass 4", [])
        assert item == NewItem(name="lemongrass", quantity=4, unit=None)

    def test_defaults_quantity_to_one(self, catalog):
        item = parse_line("Angkor Beer", catalog)
        assert item == MatchedItem(item_id="i1", quantity=1, unit=Unit.CAN)

    def test_quantity_before_trailing_period(self, catalog):
        item = parse_line("Angkor Beer 3.", catalog)
        assert item == MatchedItem(item_id="i1", quantity=3, unit=Unit.CAN)

    def test_line_without_name_is_dropped(self, catalog):
        assert parse_line("5 kg", catalog) is None
        assert parse_line("--- (!!) ---", catalog) is None

    def test_zero_quantity_is_dropped(self):
        assert parse_line("0kg sugar", []) is None

    def test_match_options_are_used(self, catalog):
        item = parse_line("beer 2", catalog, MatchOptions(score_threshold=0))
        assert isinstance(item, MatchedItem)
        assert item.item_id == "i1"


class TestAggregate:
    def test_sums_matched_by_id(self):
        items = [
            MatchedItem("i1", 2, Unit.CAN),
            NewItem("limes", 1),
            MatchedItem("i1", 3, Unit.CAN),
        ]
        assert aggregate(items) == [MatchedItem("i1", 5, Unit.CAN), NewItem("limes", 1)]

    def test_sums_new_items_case_insensitively(self):
        items = [NewItem("Limes", 1, Unit.KG), NewItem("limes", 2)]
        assert aggregate(items) == [NewItem("Limes", 3, Unit.KG)]

    def test_matched_and_new_with_same_key_stay_separate(self):
        items = [MatchedItem("rice", 1, Unit.KG), NewItem("rice", 1)]
        assert len(aggregate(items)) == 2


class TestParseItemList:
    def test_end_to_end_aggregation(self):
        catalog = [CatalogItem(id="i1", name="Angkor Beer (can)", unit=Unit.CAN)]
        result = parse_item_list("angkor beer x5\nAngkor Beer 3", catalog)
        assert result == [MatchedItem(item_id="i1", quantity=8, unit=Unit.CAN)]

    def test_same_line_twice_doubles(self, catalog):
        result = parse_item_list("2kg carrots\n2kg carrots", catalog)
        assert result == [NewItem(name="carrots", quantity=4, unit=Unit.KG)]

    def test_spaced_decimal(self):
        result = parse_item_list("0 5 kg rice", [])
        assert result == [NewItem(name="rice", quantity=0.5, unit=Unit.KG)]

    def test_blank_lines_give_empty_result(self, catalog):
        assert parse_item_list("\n   \n\t\n", catalog) == []
        assert parse_item_list("", catalog) == []

    def test_missing_catalog_makes_new_items(self):
        result = parse_item_list("angkor beer 2", None)
        assert result == [NewItem(name="angkor beer", quantity=2)]

    def test_order_follows_first_occurrence(self, catalog):
        text = "soda water 2\nlimes 1\nangkor beer 4\nsoda water 1"
        result = parse_item_list(text, catalog)
        assert [type(i).__name__ for i in result] == ["MatchedItem", "NewItem", "MatchedItem"]
        assert result[0] == MatchedItem("i3", 3, Unit.BT)

    def test_windows_line_endings(self, catalog):
        result = parse_item_list("soda water 2\r\nsoda water 1\r\n", catalog)
        assert result == [MatchedItem("i3", 3, Unit.BT)]

    def test_aliases_applied_before_matching(self, catalog):
        result = parse_item_list("ab x6", catalog, aliases={"ab": "angkor beer"})
        assert result == [MatchedItem("i1", 6, Unit.CAN)]

    def test_weak_match_becomes_new_item(self):
        catalog = [
            CatalogItem(id="c1", name="Chicken Breast", unit=Unit.KG),
            CatalogItem(id="c2", name="Chicken Thigh", unit=Unit.KG),
            CatalogItem(id="c3", name="Beef Chicken Mix", unit=Unit.KG),
        ]
        result = parse_item_list("chicken", catalog)
        assert result == [NewItem(name="chicken", quantity=1)]


class TestWireFormat:
    def test_matched_to_dict(self):
        item = MatchedItem("i1", 8, Unit.CAN)
        assert item.to_dict() == {"matchedItemId": "i1", "quantity": 8, "unit": "can"}

    def test_new_to_dict_omits_missing_unit(self):
        assert NewItem("limes", 2).to_dict() == {"newItemName": "limes", "quantity": 2}
        assert NewItem("milk", 1, Unit.L).to_dict() == {
            "newItemName": "milk", "quantity": 1, "unit": "L",
        }
