"""Tests for physical count reconciliation."""

from datetime import date

import pytest

from stockledger.core.entities.inventory import Item
from stockledger.core.exceptions import ValidationError
from stockledger.core.services.physical_count import (
    CountCandidateRow,
    CountFilters,
    apply_counts,
    build_candidate_rows,
    count_key,
    matches_search,
    parse_counted_qty,
    select_lines_to_save,
    summarize,
)


def _row(theoretical: float = 100.0, unit_cost: float = 10.0) -> CountCandidateRow:
    return CountCandidateRow(
        warehouse_id="W1",
        warehouse_name="Main Store",
        item_id="I1",
        sku="CBL-325",
        name="Cable",
        category=None,
        theoretical_qty=theoretical,
        unit_cost=unit_cost,
    )


class TestBuildCandidateRows:
    def test_rows_from_projection(self, items, warehouses):
        rows = build_candidate_rows(items, [], date(2024, 3, 31), warehouses=warehouses)
        assert [(r.warehouse_name, r.item_id, r.theoretical_qty) for r in rows] == [
            ("Branch", "I2", 5),
            ("Main Store", "I1", 50),
        ]
        assert rows[1].unit_cost == 10.0
        assert rows[0].unit_cost == 4.0

    def test_cutoff_applied(self, items, warehouses, make_transfer):
        movements = [make_transfer("I1", 20, movement_date=date(2024, 4, 2))]
        before = build_candidate_rows(items, movements, date(2024, 4, 1), warehouses=warehouses)
        after = build_candidate_rows(items, movements, date(2024, 4, 2), warehouses=warehouses)
        assert {r.key: r.theoretical_qty for r in before} == {"W2-I2": 5, "W1-I1": 50}
        assert {r.key: r.theoretical_qty for r in after} == {
            "W2-I1": 20,
            "W2-I2": 5,
            "W1-I1": 30,
        }

    def test_warehouse_filter(self, items, warehouses):
        rows = build_candidate_rows(
            items, [], None, CountFilters(warehouse_id="W2"), warehouses=warehouses
        )
        assert [r.item_id for r in rows] == ["I2"]

    def test_search_filter_matches_category(self, items, warehouses):
        rows = build_candidate_rows(
            items, [], None, CountFilters(search="plumb"), warehouses=warehouses
        )
        assert [r.item_id for r in rows] == ["I2"]

    def test_zero_stock_excluded_by_default(self, warehouses):
        empty = Item(id="I3", name="Empty", warehouse_id="W1", current_stock=0)
        assert build_candidate_rows([empty], [], None, warehouses=warehouses) == []

        rows = build_candidate_rows(
            [empty], [], None, CountFilters(include_zero_stock=True), warehouses=warehouses
        )
        assert [(r.item_id, r.theoretical_qty) for r in rows] == [("I3", 0.0)]

    def test_unknown_warehouse_label(self, cable):
        rows = build_candidate_rows([cable], [], None, unknown_warehouse_label="Depot")
        assert rows[0].warehouse_name == "Depot"


class TestApplyCounts:
    def test_variance_arithmetic(self):
        [row] = apply_counts([_row()], {"W1-I1": 97})
        assert row.difference_qty == -3
        assert row.theoretical_cost == 1000
        assert row.counted_cost == 970
        assert row.cost_difference == -30

    def test_unset_and_blank_count_as_zero(self):
        [unset] = apply_counts([_row()], {})
        [blank] = apply_counts([_row()], {"W1-I1": "  "})
        assert unset.counted_qty == 0.0
        assert blank.counted_qty == 0.0
        assert unset.difference_qty == -100

    def test_numeric_string_parsed(self):
        assert parse_counted_qty("k", "12.5") == 12.5

    def test_bad_counts_rejected(self):
        with pytest.raises(ValidationError):
            parse_counted_qty("k", "abc")
        with pytest.raises(ValidationError):
            parse_counted_qty("k", -1)

    def test_count_key_format(self):
        assert count_key("W1", "I1") == "W1-I1"


class TestSelectLinesToSave:
    def test_drops_rows_without_quantities(self):
        rows = apply_counts([_row(theoretical=0.0), _row()], {"W1-I1": 0})
        lines = select_lines_to_save(rows)
        assert len(lines) == 1
        assert lines[0].theoretical_qty == 100

    def test_counted_only_row_kept(self):
        rows = apply_counts([_row(theoretical=0.0)], {"W1-I1": 4})
        [line] = select_lines_to_save(rows, {"W1-I1": "found on shelf"})
        assert line.counted_qty == 4
        assert line.notes == "found on shelf"

    def test_nothing_to_save(self):
        rows = apply_counts([_row(theoretical=0.0)], {})
        with pytest.raises(ValidationError, match="no lines"):
            select_lines_to_save(rows)


def test_summarize_totals():
    rows = apply_counts([_row(), _row(theoretical=5.0, unit_cost=2.0)], {"W1-I1": 97})
    totals = summarize(rows)
    assert totals.theoretical_qty == 105
    # both rows share a key, so both are counted as 97
    assert totals.counted_qty == 194
    assert totals.cost_difference == -30 + (97 - 5) * 2.0


def test_matches_search_blank_matches_all():
    assert matches_search("", "SKU", "Name", None) is True
    assert matches_search("xyz", "SKU", "Name", None) is False


class TestHyphenatedIds:
    @staticmethod
    def _positions() -> list[CountCandidateRow]:
        # "a-b" + "c" and "a" + "b-c" both join to "a-b-c"
        return [
            CountCandidateRow("a-b", "Yard", "c", "S1", "Sand", None, 10.0, 1.0),
            CountCandidateRow("a", "Shed", "b-c", "S2", "Cement", None, 4.0, 2.0),
        ]

    def test_joined_key_naming_two_positions_rejected(self):
        with pytest.raises(ValidationError, match="more than one position"):
            apply_counts(self._positions(), {"a-b-c": 7})

    def test_tuple_keys_address_each_position(self):
        rows = apply_counts(self._positions(), {("a-b", "c"): 7, ("a", "b-c"): 4})
        assert [(r.item_id, r.counted_qty) for r in rows] == [("c", 7), ("b-c", 4)]

    def test_notes_by_tuple_key(self):
        rows = apply_counts(self._positions(), {("a-b", "c"): 7, ("a", "b-c"): 4})
        lines = select_lines_to_save(rows, {("a", "b-c"): "torn bag"})
        assert [line.notes for line in lines] == [None, "torn bag"]

    def test_unambiguous_hyphenated_key_still_accepted(self):
        [row] = apply_counts(self._positions()[:1], {"a-b-c": 7})
        assert row.counted_qty == 7
