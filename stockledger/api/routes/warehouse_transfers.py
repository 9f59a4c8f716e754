"""Warehouse transfer endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_check_transfer_availability_use_case,
    get_create_warehouse_transfer_use_case,
    get_post_warehouse_transfer_use_case,
    get_tenant_id,
    get_warehouse_documents_use_case,
)
from stockledger.application.dto.requests import (
    CreateWarehouseTransferRequest,
    TransferAvailabilityRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    TransferAvailabilityResponse,
    WarehouseTransferListResponse,
    WarehouseTransferResponse,
)
from stockledger.application.use_cases import (
    CheckTransferAvailabilityUseCase,
    CreateWarehouseTransferUseCase,
    GetWarehouseDocumentsUseCase,
    PostWarehouseTransferUseCase,
)

router = APIRouter(prefix="/api/warehouse-transfers", tags=["warehouse-transfers"])


@router.post(
    "/availability",
    response_model=TransferAvailabilityResponse,
)
async def check_availability(
    request: TransferAvailabilityRequest,
    tenant_id: str = Depends(get_tenant_id),
    use_case: CheckTransferAvailabilityUseCase = Depends(
        get_check_transfer_availability_use_case
    ),
) -> TransferAvailabilityResponse:
    """Preview source-warehouse availability for the requested lines."""
    result = await use_case.execute(tenant_id, request)
    return use_case.to_response(request, result)


@router.post(
    "",
    response_model=WarehouseTransferResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid endpoints or no valid lines"},
        404: {"model": ErrorResponse, "description": "Warehouse or item not found"},
    },
)
async def create_transfer(
    request: CreateWarehouseTransferRequest,
    tenant_id: str = Depends(get_tenant_id),
    use_case: CreateWarehouseTransferUseCase = Depends(
        get_create_warehouse_transfer_use_case
    ),
) -> WarehouseTransferResponse:
    """Create a draft warehouse transfer."""
    document = await use_case.execute(tenant_id, request)
    return use_case.to_response(document)


@router.get(
    "",
    response_model=WarehouseTransferListResponse,
)
async def list_transfers(
    limit: int = 100,
    offset: int = 0,
    tenant_id: str = Depends(get_tenant_id),
    use_case: GetWarehouseDocumentsUseCase = Depends(get_warehouse_documents_use_case),
) -> WarehouseTransferListResponse:
    """List transfer headers, newest first."""
    documents = await use_case.list_transfers(tenant_id, limit=limit, offset=offset)
    return use_case.transfer_list_response(documents)


@router.get(
    "/{document_id}",
    response_model=WarehouseTransferResponse,
    responses={404: {"model": ErrorResponse, "description": "Transfer not found"}},
)
async def get_transfer(
    document_id: str,
    tenant_id: str = Depends(get_tenant_id),
    use_case: GetWarehouseDocumentsUseCase = Depends(get_warehouse_documents_use_case),
) -> WarehouseTransferResponse:
    """Get a transfer with its lines."""
    document = await use_case.get_transfer(tenant_id, document_id)
    return CreateWarehouseTransferUseCase.to_response(document)


@router.post(
    "/{document_id}/post",
    response_model=WarehouseTransferResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Transfer not found"},
        409: {
            "model": ErrorResponse,
            "description": "Insufficient stock or transfer is not a draft",
        },
    },
)
async def post_transfer(
    document_id: str,
    tenant_id: str = Depends(get_tenant_id),
    use_case: PostWarehouseTransferUseCase = Depends(get_post_warehouse_transfer_use_case),
) -> WarehouseTransferResponse:
    """Check availability and append the transfer movements."""
    result = await use_case.execute(tenant_id, document_id)
    return CreateWarehouseTransferUseCase.to_response(result.document)
