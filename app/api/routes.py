from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.services.quote_selection import parse_codes_param

router = APIRouter()

_OUTCOME_STATUS = {
    'EMPTY': 200,
    'OK': 200,
    'PARTIAL': 200,
    'FULL_MISS': 404,
    'NOT_FOUND': 404,
    'TRANSPORT_FAILURE': 502,
}


def _cache_control(status_code: int, ttl_sec: int) -> str:
    if status_code != 200 or ttl_sec <= 0:
        return 'no-store'
    return f'public, max-age={ttl_sec}'


@router.get('/quotes')
def get_quotes(request: Request, codes: str | None = None):
    settings = request.app.state.get_settings()
    service = request.app.state.quote_service
    if codes is None:
        req = list(settings.DASHBOARD_QUOTES)
    else:
        req = parse_codes_param(codes)

    result = service.fetch_quotes(req)
    status_code = _OUTCOME_STATUS.get(result.outcome, 200)
    return JSONResponse(
        status_code=status_code,
        content=result.to_payload(),
        headers={'Cache-Control': _cache_control(status_code, settings.QUOTES_CACHE_TTL_SEC)},
    )


@router.get('/quotes/defaults')
def get_default_quotes(request: Request):
    return {'codes': list(request.app.state.get_settings().DASHBOARD_QUOTES)}


@router.get('/metrics/quote')
def quote_metrics(request: Request):
    return request.app.state.quote_service.metrics()
