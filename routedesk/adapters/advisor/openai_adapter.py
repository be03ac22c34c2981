"""OpenAI adapter — implements AdvisorPort using the OpenAI API."""

from __future__ import annotations

import asyncio
import json
import logging
import time

from openai import AsyncOpenAI, OpenAIError

from routedesk.application.ports.advisor_port import AdvisorPort
from routedesk.config import settings
from routedesk.domain.entities.advisor_suggestion import (
    AdvisorSuggestion,
    TicketClassification,
)
from routedesk.domain.entities.historical_assignment import HistoricalAssignment
from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.exceptions import AdvisorFailure
from routedesk.domain.value_objects.enums import Priority, RequestType

logger = logging.getLogger(__name__)

PROVIDER_NAME = "openai"
CACHE_MAX_ENTRIES = 100

CLASSIFY_SYSTEM_PROMPT = (
    "You are an AI assistant specialized in classifying customer service "
    "tickets for a chemical supply company."
)

ROUTING_SYSTEM_PROMPT = "You are an AI routing specialist for customer service tickets."

CLASSIFY_PROMPT = """\
Analyze the following customer service request and classify it:

{text}

Classify this into one of these request types:
- quote: Request for pricing or product quotes
- coa: Certificate of Analysis request
- freight: Shipping, delivery, or logistics inquiries
- claim: Complaints, issues, or damage claims
- other: Anything else

Also determine priority (low, normal, high, urgent) based on:
- Customer sentiment and urgency
- Business impact
- Time sensitivity

Respond in JSON format with:
{{
  "requestType": "...",
  "priority": "...",
  "confidence": 0.0-1.0,
  "suggestedTags": [],
  "reasoning": "..."
}}"""

ROUTING_PROMPT = """\
Analyze this ticket and suggest the best team/person to handle it:

Request Type: {request_type}
Priority: {priority}
Summary: {summary}
Customer Email: {customer_email}
Additional Data: {data}
{history}
Available teams/assignees:
- sales-team: Handles quotes and pricing
- coa-team: Handles Certificate of Analysis requests
- logistics-team: Handles freight and shipping
- customer-service: General inquiries and claims
- Adnan: Senior sales specialist for complex quotes
- Lori: Logistics manager for freight issues

Suggest primary and alternative assignees with reasoning.

Respond in JSON format:
{{
  "suggestedAssignees": [],
  "confidence": 0.0-1.0,
  "reasoning": "...",
  "alternativeAssignees": [],
  "estimatedResponseTime": minutes
}}"""

# ── Keyword lists for the classification fallback ──────────────────

REQUEST_TYPE_MARKERS: list[tuple[RequestType, list[str]]] = [
    (RequestType.CERTIFICATE_OF_ANALYSIS, ["certificate of analysis", "coa", "c of a", "lot number"]),
    (RequestType.CLAIM, ["damaged", "damage", "broken", "leak", "complaint", "claim", "refund", "wrong product"]),
    (RequestType.FREIGHT, ["freight", "shipping", "shipment", "delivery", "tracking", "carrier", "pallet"]),
    (RequestType.QUOTE, ["quote", "pricing", "price", "cost", "how much", "bulk order"]),
]

URGENT_MARKERS = ["urgent", "asap", "immediately", "emergency", "right away"]
HIGH_MARKERS = ["soon", "today", "deadline", "production stopped"]

REQUEST_TYPE_MAP: dict[str, RequestType] = {t.value: t for t in RequestType}
PRIORITY_MAP: dict[str, Priority] = {p.value: p for p in Priority}


def _lookup(mapping: dict, key, default):
    return mapping.get(key, default) if isinstance(key, str) else default


def _format_history(history: list[HistoricalAssignment]) -> str:
    if not history:
        return ""
    lines = "\n".join(f"{h.request_type} -> {h.assignee}" for h in history)
    return f"\nHistorical assignments for similar tickets:\n{lines}\n"


class OpenAIAdvisor(AdvisorPort):
    """OpenAI implementation of AdvisorPort."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        cache_ttl: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        key = (api_key if api_key is not None else settings.openai_api_key).strip()
        if client is None and key:
            client = AsyncOpenAI(api_key=key, max_retries=0)
        self._client = client
        self._model = model or settings.openai_model
        self._timeout = timeout if timeout is not None else settings.advisor_timeout_seconds
        self._max_retries = max(
            1, max_retries if max_retries is not None else settings.advisor_max_retries
        )
        self._cache_ttl = cache_ttl if cache_ttl is not None else settings.advisor_cache_ttl_seconds
        self._cache: dict[str, tuple[float, AdvisorSuggestion]] = {}

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def model_name(self) -> str | None:
        return self._model

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    # ── Classification ──────────────────────────────────────────────

    async def classify(self, context: TicketContext) -> TicketClassification:
        """Classify ticket text; falls back to keyword heuristics on LLM failure."""
        text = context.summary or json.dumps(dict(context.data), ensure_ascii=False, default=str)
        if self._client is None:
            logger.warning("OPENAI_API_KEY is not set. Using heuristic classification.")
            return self._heuristic_fallback(text)

        try:
            parsed = await self._complete_json(
                CLASSIFY_SYSTEM_PROMPT, CLASSIFY_PROMPT.format(text=text), temperature=0.3
            )
        except AdvisorFailure:
            logger.warning("LLM classification failed, using heuristic fallback")
            return self._heuristic_fallback(text)
        return self._map_to_classification(parsed)

    # ── Routing ─────────────────────────────────────────────────────

    async def suggest_routing(
        self,
        request_type: str,
        priority: str,
        summary: str | None,
        customer_email: str | None,
        data: dict | None,
        historical_assignments: list[HistoricalAssignment],
    ) -> AdvisorSuggestion:
        if self._client is None:
            raise AdvisorFailure("OpenAI advisor is not configured")

        prompt = ROUTING_PROMPT.format(
            request_type=request_type,
            priority=priority,
            summary=summary or "N/A",
            customer_email=customer_email or "N/A",
            data=json.dumps(data or {}, ensure_ascii=False, default=str),
            history=_format_history(historical_assignments),
        )

        cached = self._cache_get(prompt)
        if cached is not None:
            logger.debug("Routing suggestion cache hit")
            return cached

        parsed = await self._complete_json(ROUTING_SYSTEM_PROMPT, prompt, temperature=0.4)
        suggestion = self._map_to_suggestion(parsed)
        self._cache_put(prompt, suggestion)
        return suggestion

    # ── Internals ───────────────────────────────────────────────────

    async def _complete_json(self, system: str, user: str, temperature: float) -> dict:
        """Call the chat API and return the parsed JSON object.

        Timeouts and API errors fail immediately; unparseable output is
        retried up to ``max_retries`` times.
        """
        for attempt in range(1, self._max_retries + 1):
            try:
                response = await asyncio.wait_for(
                    self._client.chat.completions.create(
                        model=self._model,
                        messages=[
                            {"role": "system", "content": system},
                            {"role": "user", "content": user},
                        ],
                        temperature=temperature,
                        response_format={"type": "json_object"},
                    ),
                    timeout=self._timeout,
                )
            except asyncio.TimeoutError as e:
                raise AdvisorFailure(f"OpenAI call timed out after {self._timeout}s") from e
            except OpenAIError as e:
                raise AdvisorFailure(f"OpenAI API error: {e}") from e

            if not response.choices:
                logger.warning(
                    "Attempt %d/%d: LLM response has no choices", attempt, self._max_retries,
                )
                continue
            raw_text = response.choices[0].message.content or ""
            try:
                parsed = json.loads(raw_text)
            except json.JSONDecodeError:
                logger.warning(
                    "Attempt %d/%d: failed to parse JSON from LLM response",
                    attempt, self._max_retries,
                )
                continue
            if isinstance(parsed, dict):
                return parsed
            logger.warning(
                "Attempt %d/%d: LLM returned %s instead of an object",
                attempt, self._max_retries, type(parsed).__name__,
            )

        raise AdvisorFailure(f"No valid JSON after {self._max_retries} attempts")

    def _map_to_suggestion(self, parsed: dict) -> AdvisorSuggestion:
        """Map raw LLM JSON to an AdvisorSuggestion.

        Values are not coerced: a non-numeric (or boolean) confidence or a
        non-string assignee is a malformed reply. Confidence is passed
        through unclamped so out-of-range values can be rejected before
        merging.
        """
        assignees = parsed.get("suggestedAssignees")
        if not isinstance(assignees, list):
            raise AdvisorFailure("Missing 'suggestedAssignees' list in LLM response")
        if not all(isinstance(a, str) for a in assignees):
            raise AdvisorFailure(f"Non-string entry in 'suggestedAssignees': {assignees!r}")
        confidence = parsed.get("confidence", 0.0)
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise AdvisorFailure(f"Invalid confidence: {confidence!r}")

        alternatives = parsed.get("alternativeAssignees") or []
        eta = parsed.get("estimatedResponseTime")
        return AdvisorSuggestion(
            suggested_assignees=list(assignees),
            confidence=float(confidence),
            reasoning=parsed.get("reasoning"),
            alternative_assignees=[str(a) for a in alternatives] if isinstance(alternatives, list) else [],
            estimated_response_minutes=int(eta) if isinstance(eta, (int, float)) and not isinstance(eta, bool) else None,
        )

    def _map_to_classification(self, parsed: dict) -> TicketClassification:
        """Map raw LLM JSON to TicketClassification, defaulting unknown values."""
        request_type = _lookup(REQUEST_TYPE_MAP, parsed.get("requestType"), RequestType.OTHER)
        priority = _lookup(PRIORITY_MAP, parsed.get("priority"), Priority.NORMAL)
        confidence = parsed.get("confidence", 0.5)
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            confidence = 0.5
        tags = parsed.get("suggestedTags") or []
        return TicketClassification(
            request_type=request_type,
            priority=priority,
            confidence=max(0.0, min(1.0, confidence)),
            suggested_tags=[str(t) for t in tags] if isinstance(tags, list) else [],
            reasoning=parsed.get("reasoning"),
            model=self._model,
        )

    @staticmethod
    def _heuristic_fallback(text: str) -> TicketClassification:
        """Keyword-based classification when the LLM is unavailable."""
        lowered = (text or "").lower()

        request_type = RequestType.OTHER
        for candidate, markers in REQUEST_TYPE_MARKERS:
            if any(m in lowered for m in markers):
                request_type = candidate
                break

        if any(m in lowered for m in URGENT_MARKERS):
            priority = Priority.URGENT
        elif any(m in lowered for m in HIGH_MARKERS):
            priority = Priority.HIGH
        else:
            priority = Priority.NORMAL

        return TicketClassification(
            request_type=request_type,
            priority=priority,
            confidence=0.3 if request_type != RequestType.OTHER else 0.1,
            reasoning="Keyword heuristic",
            model="heuristic-fallback",
        )

    def _cache_get(self, key: str) -> AdvisorSuggestion | None:
        if self._cache_ttl <= 0:
            return None
        entry = self._cache.get(key)
        if entry is None:
            return None
        expiry, suggestion = entry
        if expiry < time.monotonic():
            del self._cache[key]
            return None
        return suggestion

    def _cache_put(self, key: str, suggestion: AdvisorSuggestion) -> None:
        if self._cache_ttl <= 0:
            return
        now = time.monotonic()
        self._cache.pop(key, None)
        self._cache[key] = (now + self._cache_ttl, suggestion)
        if len(self._cache) > CACHE_MAX_ENTRIES:
            for k in [k for k, (exp, _) in self._cache.items() if exp < now]:
                del self._cache[k]
        # Insertion order is expiry order; drop the oldest live entries.
        while len(self._cache) > CACHE_MAX_ENTRIES:
            del self._cache[next(iter(self._cache))]
