from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router
from app.config.settings import Settings, get_settings
from app.integrations.awesome_rest import AwesomeQuoteClient
from app.services.quote_aggregator import QuoteAggregatorService


def build_quote_service(settings: Settings) -> QuoteAggregatorService:
    client = AwesomeQuoteClient(
        base_url=settings.QUOTES_BASE_URL,
        timeout=settings.QUOTES_TIMEOUT_SEC,
        user_agent=settings.QUOTES_USER_AGENT,
    )
    return QuoteAggregatorService(client=client)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.get_settings()
    print(
        f"[APP][startup] quotes_base_url={settings.QUOTES_BASE_URL} "
        f"timeout_sec={settings.QUOTES_TIMEOUT_SEC}",
        flush=True,
    )
    try:
        yield
    finally:
        client = app.state.quote_service.client
        close = getattr(client, "close", None)
        if callable(close):
            close()
        print("[APP][shutdown] quote client closed", flush=True)


app = FastAPI(title="Flortune Quote Gateway", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/v1")

app.state.get_settings = get_settings
app.state.quote_service = build_quote_service(get_settings())
