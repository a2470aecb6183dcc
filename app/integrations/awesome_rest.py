from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import requests

from app.errors import QuotePayloadError


class AwesomeQuoteClient:
    """AwesomeAPI `last` endpoint client: one GET per batch of pair codes."""

    def __init__(
        self,
        base_url: str = "https://economia.awesomeapi.com.br/last",
        timeout: float = 5.0,
        session: Optional[Any] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_session = session is None
        self.session = session or requests.Session()

    def build_url(self, codes: Sequence[str]) -> str:
        return f"{self.base_url}/{','.join(codes)}"

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.user_agent:
            headers["user-agent"] = self.user_agent
        return headers

    def get_last(self, codes: Sequence[str]) -> Dict[str, Any]:
        response = self.session.get(
            self.build_url(codes),
            headers=self._headers(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise QuotePayloadError(
                "upstream returned a non-JSON body",
                status_code=getattr(response, "status_code", None),
            ) from exc

        if not isinstance(payload, dict):
            raise QuotePayloadError(
                "upstream payload must be an object",
                status_code=getattr(response, "status_code", None),
                payload=payload,
            )
        return payload

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
