"""Physical count history - read-only access to saved sessions."""

from stockledger.application.dto.responses import (
    CountTotalsResponse,
    PhysicalCountLineResponse,
    PhysicalCountSessionListResponse,
    PhysicalCountSessionResponse,
)
from stockledger.config import get_logger
from stockledger.core.entities.physical_count import PhysicalCountSession
from stockledger.core.exceptions import PhysicalCountNotFoundError
from stockledger.core.interfaces.physical_count_store import IPhysicalCountStore

logger = get_logger(__name__)


class GetPhysicalCountsUseCase:
    """List saved sessions and load one with its frozen lines."""

    def __init__(self, count_store: IPhysicalCountStore | None = None):
        self._count_store = count_store

    async def _get_count_store(self) -> IPhysicalCountStore:
        if self._count_store is None:
            from stockledger.infrastructure.storage.sqlite import get_physical_count_store

            self._count_store = await get_physical_count_store()
        return self._count_store

    async def list_sessions(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[PhysicalCountSession]:
        store = await self._get_count_store()
        return await store.list_sessions(tenant_id, limit=limit, offset=offset)

    async def load_session_detail(
        self, tenant_id: str, session_id: str
    ) -> PhysicalCountSession:
        """
        Load a saved session with its lines.

        Raises:
            PhysicalCountNotFoundError: if the tenant has no such session
        """
        store = await self._get_count_store()
        session = await store.get_session(tenant_id, session_id)
        if session is None:
            raise PhysicalCountNotFoundError(session_id)
        logger.debug(
            "physical_count_loaded",
            tenant_id=tenant_id,
            session_id=session_id,
            lines=len(session.lines),
        )
        return session

    @staticmethod
    def to_response(
        session: PhysicalCountSession, with_lines: bool = True
    ) -> PhysicalCountSessionResponse:
        return PhysicalCountSessionResponse(
            id=session.id,  # type: ignore[arg-type]
            warehouse_id=session.warehouse_id,
            count_date=session.count_date,
            description=session.description,
            status=session.status.value,
            created_at=session.created_at,
            lines=[
                PhysicalCountLineResponse(**line.model_dump())
                for line in session.lines
            ]
            if with_lines
            else [],
            totals=CountTotalsResponse(**session.totals.model_dump())
            if with_lines
            else None,
        )

    @classmethod
    def to_list_response(
        cls, sessions: list[PhysicalCountSession]
    ) -> PhysicalCountSessionListResponse:
        return PhysicalCountSessionListResponse(
            sessions=[cls.to_response(s, with_lines=False) for s in sessions],
            total=len(sessions),
        )
