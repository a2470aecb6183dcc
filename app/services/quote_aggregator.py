from __future__ import annotations

from typing import Any, Iterable, Sequence

from pydantic import ValidationError

from app.errors import QuotePayloadError
from app.schemas.quote import QuoteOutcome, QuoteRecord, QuoteResponse

PAIR_SEPARATOR = "-"

TRANSPORT_FAILURE_MESSAGE = "failed to fetch quote data from the external quote API"


def upstream_key(code: str) -> str:
    """Map a requested pair code to the provider's response key ("USD-BRL" -> "USDBRL")."""
    return code.replace(PAIR_SEPARATOR, "")


def dedupe_codes(codes: Iterable[str]) -> list[str]:
    unique: list[str] = []
    seen: set[str] = set()
    for code in codes:
        if code in seen:
            continue
        seen.add(code)
        unique.append(code)
    return unique


def not_found_message(query: str) -> str:
    return f"one or more quotes ({query}) were not found; check the codes"


def full_miss_message(query: str) -> str:
    return f"none of the requested quotes were found: {query}"


class QuoteAggregatorService:
    """Batches requested pair codes into one upstream call and reshapes the answer."""

    def __init__(self, *, client) -> None:
        self.client = client

        self.upstream_calls = 0
        self.transport_failures = 0
        self.not_found = 0
        self.full_misses = 0
        self.partial_misses = 0
        self.empty_requests = 0
        self.last_batch_requested = 0
        self.last_batch_unique = 0
        self.last_batch_returned = 0

    @staticmethod
    def _status_code_from_error(exc: Exception) -> int | None:
        response = getattr(exc, "response", None)
        code = getattr(response, "status_code", None)
        if isinstance(code, int):
            return code
        return None

    @staticmethod
    def _pick_records(payload: dict[str, Any], unique_codes: Sequence[str]) -> list[QuoteRecord]:
        if not isinstance(payload, dict):
            raise QuotePayloadError("upstream payload must be an object", payload=payload)
        out: list[QuoteRecord] = []
        for code in unique_codes:
            raw = payload.get(upstream_key(code))
            if not raw:
                continue
            try:
                out.append(QuoteRecord.model_validate(raw))
            except ValidationError as exc:
                raise QuotePayloadError(
                    f"invalid quote object for {code}", payload=raw
                ) from exc
        return out

    def _failure(self, message: str, outcome: QuoteOutcome) -> QuoteResponse:
        if outcome == "NOT_FOUND":
            self.not_found += 1
        else:
            self.transport_failures += 1
        self.last_batch_returned = 0
        return QuoteResponse(data=None, error=message, outcome=outcome)

    def fetch_quotes(self, requested_codes: Sequence[str]) -> QuoteResponse:
        self.last_batch_requested = len(requested_codes)
        if not requested_codes:
            self.empty_requests += 1
            self.last_batch_unique = 0
            self.last_batch_returned = 0
            return QuoteResponse(data=[], error=None, outcome="EMPTY")

        unique_codes = dedupe_codes(requested_codes)
        query = ",".join(unique_codes)
        self.last_batch_unique = len(unique_codes)

        self.upstream_calls += 1
        try:
            payload = self.client.get_last(unique_codes)
            records = self._pick_records(payload, unique_codes)
        except Exception as exc:
            status_code = self._status_code_from_error(exc)
            print(
                f"[QUOTE][upstream_error] query={query} status={status_code} "
                f"error={type(exc).__name__}: {exc}",
                flush=True,
            )
            if status_code == 404:
                return self._failure(not_found_message(query), "NOT_FOUND")
            return self._failure(TRANSPORT_FAILURE_MESSAGE, "TRANSPORT_FAILURE")

        self.last_batch_returned = len(records)
        if not records:
            self.full_misses += 1
            print(f"[QUOTE][full_miss] query={query} upstream_keys={','.join(payload)}", flush=True)
            return QuoteResponse(data=None, error=full_miss_message(query), outcome="FULL_MISS")

        outcome: QuoteOutcome = "OK"
        if len(records) < len(unique_codes):
            self.partial_misses += 1
            outcome = "PARTIAL"

        print(
            "[QUOTE][batch_resolve] "
            f"requested_count={len(requested_codes)} unique_count={len(unique_codes)} "
            f"returned_count={len(records)} outcome={outcome}",
            flush=True,
        )
        return QuoteResponse(data=records, error=None, outcome=outcome)

    def metrics(self) -> dict[str, int]:
        return {
            "upstream_calls": self.upstream_calls,
            "transport_failures": self.transport_failures,
            "not_found": self.not_found,
            "full_misses": self.full_misses,
            "partial_misses": self.partial_misses,
            "empty_requests": self.empty_requests,
            "batch_requested_count": self.last_batch_requested,
            "batch_unique_count": self.last_batch_unique,
            "batch_returned_count": self.last_batch_returned,
        }
