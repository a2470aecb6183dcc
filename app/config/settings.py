import os
from functools import lru_cache

from pydantic import BaseModel, Field

from app.services.quote_selection import normalize_selection

_DEFAULT_BASE_URL = "https://economia.awesomeapi.com.br/last"
_DEFAULT_DASHBOARD_QUOTES = ["USD-BRL", "EUR-BRL", "BTC-BRL", "GBP-BRL", "JPY-BRL"]
_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.36"
)


class Settings(BaseModel):
    QUOTES_BASE_URL: str
    QUOTES_TIMEOUT_SEC: float = Field(gt=0)
    QUOTES_CACHE_TTL_SEC: int = Field(default=600, ge=0)
    QUOTES_USER_AGENT: str = _DEFAULT_USER_AGENT
    DASHBOARD_QUOTES: list[str] = Field(max_length=5)

    @classmethod
    def from_env(cls) -> "Settings":
        raw_dashboard = os.getenv("FLORTUNE_DASHBOARD_QUOTES")
        if raw_dashboard is None:
            dashboard_quotes = list(_DEFAULT_DASHBOARD_QUOTES)
        else:
            # "none" slots are dropped here; more than five real codes still fails validation
            dashboard_quotes = normalize_selection(raw_dashboard.split(","), max_slots=None)

        return cls.model_validate(
            {
                "QUOTES_BASE_URL": os.getenv("FLORTUNE_QUOTES_BASE_URL", _DEFAULT_BASE_URL),
                "QUOTES_TIMEOUT_SEC": os.getenv("FLORTUNE_QUOTES_TIMEOUT_SEC", "5"),
                "QUOTES_CACHE_TTL_SEC": os.getenv("FLORTUNE_QUOTES_CACHE_TTL_SEC", "600"),
                "QUOTES_USER_AGENT": os.getenv("FLORTUNE_QUOTES_USER_AGENT", _DEFAULT_USER_AGENT),
                "DASHBOARD_QUOTES": dashboard_quotes,
            }
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
