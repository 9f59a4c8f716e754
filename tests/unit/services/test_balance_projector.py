"""Tests for the warehouse balance projector."""

from datetime import date

from hypothesis import given
from hypothesis import strategies as st

from stockledger.core.entities.inventory import Item, Movement, MovementKind
from stockledger.core.services.balance_projector import (
    FOLDED_MOVEMENT_KINDS,
    WarehouseBalances,
    compute_balances,
)

WAREHOUSE_IDS = ["W1", "W2", "W3"]
ITEM_IDS = ["I1", "I2", "I3"]

items_strategy = st.lists(
    st.builds(
        Item,
        id=st.sampled_from(ITEM_IDS),
        warehouse_id=st.one_of(st.none(), st.sampled_from(WAREHOUSE_IDS)),
        current_stock=st.integers(min_value=0, max_value=1000),
    ),
    max_size=3,
    unique_by=lambda item: item.id,
)

transfer_strategy = st.tuples(
    st.sampled_from(ITEM_IDS),
    st.integers(min_value=1, max_value=500),
    st.permutations(WAREHOUSE_IDS),
    st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 12, 31)),
).map(
    lambda t: Movement(
        item_id=t[0],
        movement_type=MovementKind.TRANSFER,
        quantity=t[1],
        movement_date=t[3],
        from_warehouse_id=t[2][0],
        to_warehouse_id=t[2][1],
    )
)

other_movement_strategy = st.builds(
    Movement,
    item_id=st.sampled_from(ITEM_IDS),
    movement_type=st.sampled_from(
        [MovementKind.ENTRY, MovementKind.EXIT, MovementKind.ADJUSTMENT]
    ),
    quantity=st.integers(min_value=1, max_value=500),
    movement_date=st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 12, 31)),
)

movements_strategy = st.lists(
    st.one_of(transfer_strategy, other_movement_strategy), max_size=25
)


def _seed_total(items: list[Item], item_id: str) -> float:
    return sum(
        item.current_stock
        for item in items
        if item.id == item_id and item.warehouse_id
    )


class TestProjectorProperties:
    @given(items=items_strategy, movements=movements_strategy)
    def test_transfers_conserve_item_totals(self, items, movements):
        balances = compute_balances(items, movements)
        for item in items:
            assert balances.total_for_item(item.id) == _seed_total(items, item.id)

    @given(items=items_strategy, movements=movements_strategy)
    def test_projection_is_idempotent(self, items, movements):
        first = compute_balances(items, movements)
        second = compute_balances(items, movements)
        assert dict(first) == dict(second)

    @given(items=items_strategy)
    def test_seed_without_movements(self, items):
        balances = compute_balances(items, [])
        for item in items:
            if item.warehouse_id and item.current_stock:
                assert balances[(item.warehouse_id, item.id)] == item.current_stock
        assert len(balances) == sum(
            1 for item in items if item.warehouse_id and item.current_stock
        )

    @given(
        items=items_strategy,
        movements=st.lists(other_movement_strategy, max_size=10),
    )
    def test_non_folded_kinds_leave_seed_untouched(self, items, movements):
        assert dict(compute_balances(items, movements)) == dict(compute_balances(items, []))


class TestComputeBalances:
    def test_transfer_moves_stock(self, items, make_transfer):
        balances = compute_balances(items, [make_transfer("I1", 20)])
        assert balances.quantity("W1", "I1") == 30
        assert balances.quantity("W2", "I1") == 20
        assert balances.quantity("W2", "I2") == 5

    def test_cutoff_is_inclusive(self, items, make_transfer):
        movements = [
            make_transfer("I1", 10, movement_date=date(2024, 3, 1)),
            make_transfer("I1", 5, movement_date=date(2024, 3, 2)),
        ]
        balances = compute_balances(items, movements, cutoff_date=date(2024, 3, 1))
        assert balances.quantity("W1", "I1") == 40
        assert balances.quantity("W2", "I1") == 10

    def test_unknown_item_skipped(self, items, make_transfer):
        balances = compute_balances(items, [make_transfer("GHOST", 10)])
        assert balances.for_item("GHOST") == {}

    def test_item_without_home_not_seeded(self, make_transfer):
        item = Item(id="I9", current_stock=12)
        balances = compute_balances([item], [make_transfer("I9", 2)])
        assert balances.quantity("W1", "I9") == -2
        assert balances.quantity("W2", "I9") == 2

    def test_folded_kinds_policy(self):
        assert FOLDED_MOVEMENT_KINDS == frozenset({MovementKind.TRANSFER})

    def test_folding_entries_when_requested(self, cable):
        entry = Movement(
            item_id="I1",
            movement_type=MovementKind.ENTRY,
            quantity=5,
            movement_date=date(2024, 1, 1),
        )
        balances = compute_balances(
            [cable],
            [entry],
            folded_kinds=frozenset({MovementKind.TRANSFER, MovementKind.ENTRY}),
        )
        assert balances.quantity("W1", "I1") == 55

    def test_adjustments_never_folded(self, cable):
        adjustment = Movement(
            item_id="I1",
            movement_type=MovementKind.ADJUSTMENT,
            quantity=5,
            movement_date=date(2024, 1, 1),
        )
        balances = compute_balances(
            [cable],
            [adjustment],
            folded_kinds=frozenset(MovementKind),
        )
        assert balances.quantity("W1", "I1") == 50


class TestWarehouseBalances:
    def test_helpers(self):
        balances = WarehouseBalances({("W1", "I1"): 3.0, ("W2", "I1"): 2.0, ("W1", "I2"): 1.0})
        assert balances.for_warehouse("W1") == {"I1": 3.0, "I2": 1.0}
        assert balances.for_item("I1") == {"W1": 3.0, "W2": 2.0}
        assert balances.total_for_item("I1") == 5.0
        assert balances.warehouse_ids() == ["W1", "W2"]
        assert balances.as_nested_dict() == {"W1": {"I1": 3.0, "I2": 1.0}, "W2": {"I1": 2.0}}
        assert balances.quantity("W3", "I1") == 0.0

    def test_is_read_only(self):
        balances = WarehouseBalances({("W1", "I1"): 3.0})
        assert not hasattr(balances, "__setitem__")
