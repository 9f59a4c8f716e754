"""Warehouse entry (goods receipt) endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_create_warehouse_entry_use_case,
    get_post_warehouse_entry_use_case,
    get_tenant_id,
    get_warehouse_documents_use_case,
)
from stockledger.application.dto.requests import CreateWarehouseEntryRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    WarehouseEntryListResponse,
    WarehouseEntryResponse,
)
from stockledger.application.use_cases import (
    CreateWarehouseEntryUseCase,
    GetWarehouseDocumentsUseCase,
    PostWarehouseEntryUseCase,
)

router = APIRouter(prefix="/api/warehouse-entries", tags=["warehouse-entries"])


@router.post(
    "",
    response_model=WarehouseEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "No valid lines"},
        404: {"model": ErrorResponse, "description": "Warehouse or item not found"},
    },
)
async def create_entry(
    request: CreateWarehouseEntryRequest,
    tenant_id: str = Depends(get_tenant_id),
    use_case: CreateWarehouseEntryUseCase = Depends(get_create_warehouse_entry_use_case),
) -> WarehouseEntryResponse:
    """Create a draft warehouse entry."""
    document = await use_case.execute(tenant_id, request)
    return use_case.to_response(document)


@router.get(
    "",
    response_model=WarehouseEntryListResponse,
)
async def list_entries(
    limit: int = 100,
    offset: int = 0,
    tenant_id: str = Depends(get_tenant_id),
    use_case: GetWarehouseDocumentsUseCase = Depends(get_warehouse_documents_use_case),
) -> WarehouseEntryListResponse:
    """List entry headers, newest first."""
    documents = await use_case.list_entries(tenant_id, limit=limit, offset=offset)
    return use_case.entry_list_response(documents)


@router.get(
    "/{document_id}",
    response_model=WarehouseEntryResponse,
    responses={404: {"model": ErrorResponse, "description": "Entry not found"}},
)
async def get_entry(
    document_id: str,
    tenant_id: str = Depends(get_tenant_id),
    use_case: GetWarehouseDocumentsUseCase = Depends(get_warehouse_documents_use_case),
) -> WarehouseEntryResponse:
    """Get an entry with its lines."""
    document = await use_case.get_entry(tenant_id, document_id)
    return CreateWarehouseEntryUseCase.to_response(document)


@router.post(
    "/{document_id}/post",
    response_model=WarehouseEntryResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Entry not found"},
        409: {"model": ErrorResponse, "description": "Entry is not a draft"},
        500: {"model": ErrorResponse, "description": "Ledger posting failed"},
    },
)
async def post_entry(
    document_id: str,
    tenant_id: str = Depends(get_tenant_id),
    use_case: PostWarehouseEntryUseCase = Depends(get_post_warehouse_entry_use_case),
) -> WarehouseEntryResponse:
    """Post a draft entry to the stock ledger."""
    document = await use_case.execute(tenant_id, document_id)
    return CreateWarehouseEntryUseCase.to_response(document)
