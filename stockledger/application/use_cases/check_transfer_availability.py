"""Check Transfer Availability Use Case - read-only preview for the transfer screen."""

from datetime import date

from stockledger.application.dto.requests import TransferAvailabilityRequest
from stockledger.application.dto.responses import (
    TransferAvailabilityLineResponse,
    TransferAvailabilityResponse,
)
from stockledger.application.snapshot import SnapshotLoader
from stockledger.config import get_logger
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.balance_projector import compute_balances
from stockledger.core.services.transfer_availability import (
    ItemAvailability,
    assess_availability,
)

logger = get_logger(__name__)


class CheckTransferAvailabilityUseCase:
    """Compare prospective transfer lines with the source warehouse balances."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._loader = SnapshotLoader(inventory_store)

    async def execute(
        self, tenant_id: str, request: TransferAvailabilityRequest
    ) -> list[ItemAvailability]:
        requested: dict[str, float] = {}
        for line in request.lines:
            if line.item_id and line.quantity > 0:
                requested[line.item_id] = requested.get(line.item_id, 0.0) + line.quantity
        if not requested:
            return []

        snapshot = await self._loader.load(tenant_id)
        balances = compute_balances(snapshot.items, snapshot.movements, request.as_of)
        result = assess_availability(
            request.from_warehouse_id, requested, balances, snapshot.items_by_id
        )
        logger.debug(
            "transfer_availability_checked",
            tenant_id=tenant_id,
            warehouse_id=request.from_warehouse_id,
            items=len(result),
            short=sum(1 for a in result if not a.sufficient),
        )
        return result

    @staticmethod
    def to_response(
        request: TransferAvailabilityRequest, result: list[ItemAvailability]
    ) -> TransferAvailabilityResponse:
        return TransferAvailabilityResponse(
            from_warehouse_id=request.from_warehouse_id,
            as_of=request.as_of or date.today(),
            lines=[
                TransferAvailabilityLineResponse(**a.to_record()) for a in result
            ],
            all_sufficient=all(a.sufficient for a in result),
        )
