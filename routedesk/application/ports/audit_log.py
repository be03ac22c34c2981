"""Port interface for the append-only advisor audit log."""

from abc import ABC, abstractmethod

from routedesk.domain.entities.audit_entry import AuditEntry


class AuditLog(ABC):
    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        """Persist one entry. Entries are never read back by the routing core."""
        ...
