"""Abstract interface for physical count session storage."""

from abc import ABC, abstractmethod

from stockledger.core.entities.physical_count import (
    PhysicalCountLine,
    PhysicalCountSession,
)


class IPhysicalCountStore(ABC):
    """Append-only storage of saved stock-takes."""

    @abstractmethod
    async def create_session(
        self,
        tenant_id: str,
        header: PhysicalCountSession,
        lines: list[PhysicalCountLine],
    ) -> str:
        """Persist a session header and its lines. Returns the new session id."""
        pass

    @abstractmethod
    async def list_sessions(
        self, tenant_id: str, limit: int = 100, offset: int = 0
    ) -> list[PhysicalCountSession]:
        """List session headers, newest count date first. Lines are not loaded."""
        pass

    @abstractmethod
    async def get_session(
        self, tenant_id: str, session_id: str
    ) -> PhysicalCountSession | None:
        """Get a session with all of its lines."""
        pass
