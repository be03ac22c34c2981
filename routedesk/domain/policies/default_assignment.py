"""DefaultAssignmentPolicy — fixed per-category queues when no rule matches."""

from __future__ import annotations

from routedesk.domain.value_objects.enums import RequestType

FALLBACK_QUEUE = "customer-service"

DEFAULT_ASSIGNEES: dict[RequestType, tuple[str, ...]] = {
    RequestType.QUOTE: ("sales-team",),
    RequestType.CERTIFICATE_OF_ANALYSIS: ("coa-team",),
    RequestType.FREIGHT: ("logistics-team",),
    RequestType.CLAIM: (FALLBACK_QUEUE,),
    RequestType.OTHER: (FALLBACK_QUEUE,),
}


def default_assignees_for(request_type: RequestType | str | None) -> list[str]:
    """Return a fresh list of default assignees for *request_type*.

    Unknown or missing types go to the customer-service queue.
    """
    try:
        key = RequestType(request_type)
    except ValueError:
        return [FALLBACK_QUEUE]
    return list(DEFAULT_ASSIGNEES.get(key, (FALLBACK_QUEUE,)))
