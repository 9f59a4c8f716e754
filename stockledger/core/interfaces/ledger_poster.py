"""Port for the stock-ledger posting step of warehouse entries."""

from abc import ABC, abstractmethod

from stockledger.core.entities.warehouse_document import WarehouseEntryDocument


class ILedgerPoster(ABC):
    """Applies a posted warehouse entry to item stock.

    Entries, exits and adjustments change ``Item.current_stock`` through this
    step; they are not folded into warehouse balances by the projector.
    """

    @abstractmethod
    async def post_entry(self, tenant_id: str, document: WarehouseEntryDocument) -> None:
        pass
