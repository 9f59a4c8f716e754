"""Physical count (stock-take) endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_build_physical_count_use_case,
    get_physical_counts_use_case,
    get_save_physical_count_use_case,
    get_tenant_id,
)
from stockledger.application.dto.requests import (
    PhysicalCountSheetRequest,
    SavePhysicalCountRequest,
)
from stockledger.application.dto.responses import (
    ErrorResponse,
    PhysicalCountSessionListResponse,
    PhysicalCountSessionResponse,
    PhysicalCountSheetResponse,
)
from stockledger.application.use_cases import (
    BuildPhysicalCountUseCase,
    GetPhysicalCountsUseCase,
    SavePhysicalCountUseCase,
)

router = APIRouter(prefix="/api/physical-counts", tags=["physical-counts"])


@router.post(
    "/candidates",
    response_model=PhysicalCountSheetResponse,
)
async def build_candidates(
    request: PhysicalCountSheetRequest,
    tenant_id: str = Depends(get_tenant_id),
    use_case: BuildPhysicalCountUseCase = Depends(get_build_physical_count_use_case),
) -> PhysicalCountSheetResponse:
    """Count sheet rows with theoretical stock at the cutoff and any counts applied."""
    sheet = await use_case.execute(tenant_id, request)
    return use_case.to_response(sheet)


@router.post(
    "",
    response_model=PhysicalCountSessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Nothing to save"}},
)
async def save_physical_count(
    request: SavePhysicalCountRequest,
    tenant_id: str = Depends(get_tenant_id),
    use_case: SavePhysicalCountUseCase = Depends(get_save_physical_count_use_case),
) -> PhysicalCountSessionResponse:
    """Save a stock-take session with its frozen lines."""
    session = await use_case.execute(tenant_id, request)
    return GetPhysicalCountsUseCase.to_response(session)


@router.get(
    "",
    response_model=PhysicalCountSessionListResponse,
)
async def list_physical_counts(
    limit: int = 100,
    offset: int = 0,
    tenant_id: str = Depends(get_tenant_id),
    use_case: GetPhysicalCountsUseCase = Depends(get_physical_counts_use_case),
) -> PhysicalCountSessionListResponse:
    """List saved sessions, newest first."""
    sessions = await use_case.list_sessions(tenant_id, limit=limit, offset=offset)
    return use_case.to_list_response(sessions)


@router.get(
    "/{session_id}",
    response_model=PhysicalCountSessionResponse,
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
async def get_physical_count(
    session_id: str,
    tenant_id: str = Depends(get_tenant_id),
    use_case: GetPhysicalCountsUseCase = Depends(get_physical_counts_use_case),
) -> PhysicalCountSessionResponse:
    """Get a saved session with its lines and totals."""
    session = await use_case.load_session_detail(tenant_id, session_id)
    return use_case.to_response(session)
