"""Port interface for routing rule persistence."""

from abc import ABC, abstractmethod

from routedesk.domain.entities.routing_rule import RoutingRule


class RuleRepository(ABC):
    @abstractmethod
    async def list_active(self) -> list[RoutingRule]:
        """Return active rules ordered by ``order`` ASC, then insertion order.

        Raises StoreUnavailable if the backing store cannot be reached.
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[RoutingRule]:
        ...

    @abstractmethod
    async def get_by_id(self, rule_id: int) -> RoutingRule | None:
        ...

    @abstractmethod
    async def save(self, rule: RoutingRule) -> RoutingRule:
        ...

    @abstractmethod
    async def update(self, rule: RoutingRule) -> RoutingRule:
        ...
