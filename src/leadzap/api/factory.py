"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response

from leadzap.observability.correlation import CORRELATION_ID_HEADER, bind_correlation_id

from .routers import public
from .routes import whatsapp

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def create_app() -> FastAPI:
    """Create the FastAPI app with CORS and correlation ID middleware."""
    app = FastAPI(
        title="leadzap",
        docs_url=None,
        redoc_url=None,
    )

    # Browser front end calls us cross-origin; preflight never reaches a route
    @app.middleware("http")
    async def cors_middleware(request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with bind_correlation_id(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    app.include_router(public.router)
    app.include_router(whatsapp.router)

    return app
