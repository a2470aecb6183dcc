from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

QuoteOutcome = Literal["EMPTY", "OK", "PARTIAL", "FULL_MISS", "NOT_FOUND", "TRANSPORT_FAILURE"]

QuoteValue = Union[str, int, float, None]


class QuoteRecord(BaseModel):
    """One upstream quote, passed through as the provider sent it.

    Only ``code`` and ``codein`` must exist; the remaining fields are not
    parsed, and keys the provider did not send are left out on dump.
    """

    model_config = ConfigDict(extra="allow")

    code: str
    codein: str
    name: QuoteValue = None
    high: QuoteValue = None
    low: QuoteValue = None
    varBid: QuoteValue = None
    pctChange: QuoteValue = None
    bid: QuoteValue = None
    ask: QuoteValue = None
    timestamp: QuoteValue = None
    create_date: QuoteValue = None


class QuoteResponse(BaseModel):
    data: list[QuoteRecord] | None
    error: str | None
    outcome: QuoteOutcome = Field(default="OK", exclude=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)
