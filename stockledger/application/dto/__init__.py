"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stockledger.application.dto.requests import (
    CreateWarehouseEntryRequest,
    CreateWarehouseTransferRequest,
    EntryLineRequest,
    PhysicalCountSheetRequest,
    SavePhysicalCountRequest,
    TransferAvailabilityRequest,
    TransferLineRequest,
)
from stockledger.application.dto.responses import (
    CountTotalsResponse,
    EntryLineResponse,
    ErrorResponse,
    ExistenceReportResponse,
    ExistenceRowResponse,
    HealthResponse,
    LowStockItemResponse,
    LowStockReportResponse,
    PhysicalCountLineResponse,
    PhysicalCountRowResponse,
    PhysicalCountSessionListResponse,
    PhysicalCountSessionResponse,
    PhysicalCountSheetResponse,
    ProviderHealthResponse,
    TransferAvailabilityLineResponse,
    TransferAvailabilityResponse,
    TransferLineResponse,
    ValuationReportResponse,
    WarehouseBalanceResponse,
    WarehouseBalancesResponse,
    WarehouseEntryListResponse,
    WarehouseEntryResponse,
    WarehouseTransferListResponse,
    WarehouseTransferResponse,
)

__all__ = [
    # Requests
    "EntryLineRequest",
    "CreateWarehouseEntryRequest",
    "TransferLineRequest",
    "CreateWarehouseTransferRequest",
    "TransferAvailabilityRequest",
    "PhysicalCountSheetRequest",
    "SavePhysicalCountRequest",
    # Responses
    "WarehouseBalanceResponse",
    "WarehouseBalancesResponse",
    "TransferAvailabilityLineResponse",
    "TransferAvailabilityResponse",
    "EntryLineResponse",
    "WarehouseEntryResponse",
    "WarehouseEntryListResponse",
    "TransferLineResponse",
    "WarehouseTransferResponse",
    "WarehouseTransferListResponse",
    "CountTotalsResponse",
    "PhysicalCountRowResponse",
    "PhysicalCountSheetResponse",
    "PhysicalCountLineResponse",
    "PhysicalCountSessionResponse",
    "PhysicalCountSessionListResponse",
    "ExistenceRowResponse",
    "ExistenceReportResponse",
    "LowStockItemResponse",
    "LowStockReportResponse",
    "ValuationReportResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
