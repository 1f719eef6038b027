"""
Local medicine lookup server.

Serves POST /api/medicine-lookup with body {"medicineName": "..."} and
answers with the lookup envelope {found, medicine, suggestion?, disclaimer?}.

Status codes:
    200  found, or not found with an optional suggestion
    400  missing or blank medicineName
    500  configuration, transport or parse failure
"""

import json
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medinfo.config import Settings, get_settings
from medinfo.core.resolver import RemoteMedicineResolver, create_resolver
from medinfo.logs import banner, get_component_logger
from medinfo.models import LookupErrorKind, LookupResult

logger = get_component_logger("MedicineLookupServer")

CORS_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def _error_response(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


def create_app(
    resolver: Optional[RemoteMedicineResolver] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        resolver: Resolver used for lookups; built from settings when omitted.
        settings: Application settings; the global instance when omitted.
    """
    settings = settings or get_settings()
    resolver = resolver or create_resolver(settings)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.resolver = resolver

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "provider": resolver.provider_type,
            "credential_configured": bool(resolver.api_key),
        }

    @app.post("/api/medicine-lookup")
    async def medicine_lookup(request: Request):
        """
        Look up one medicine.

        The body is read by hand so that a malformed or incomplete request
        answers 400 with the lookup error shape rather than a validation list.
        """
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None

        medicine_name = body.get("medicineName") if isinstance(body, dict) else None
        if not isinstance(medicine_name, str) or not medicine_name.strip():
            return _error_response(400, {"error": "Medicine name is required"})

        medicine_name = medicine_name.strip()
        logger.info(
            "Processing lookup request",
            component="MedicineLookupServer",
            subcomponent="Lookup",
            medicine_name=medicine_name,
        )

        try:
            result = await resolver.lookup(medicine_name)
        except Exception as e:
            logger.error(
                "Lookup raised",
                component="MedicineLookupServer",
                subcomponent="Lookup",
                medicine_name=medicine_name,
                error=str(e),
                exc_info=True,
            )
            result = LookupResult.failure(
                LookupErrorKind.TRANSPORT, "Medicine lookup service is unavailable"
            )

        if result.failed:
            logger.error(
                "Lookup failed",
                component="MedicineLookupServer",
                subcomponent="Lookup",
                medicine_name=medicine_name,
                error=result.error,
                error_kind=result.error_kind.value if result.error_kind else None,
            )
            if result.error_kind == LookupErrorKind.CONFIGURATION:
                return _error_response(500, {"error": result.error})
            return _error_response(
                500, {"error": result.error, "found": False, "medicine": None}
            )

        return result.to_wire()

    return app


def main():
    """Run the local lookup server with uvicorn."""
    settings = get_settings()
    banner(f"{settings.app_name} lookup server")
    logger.info(
        "Starting lookup server",
        component="MedicineLookupServer",
        subcomponent="Main",
        host=settings.server_host,
        port=settings.server_port,
        provider=settings.llm_provider,
    )
    uvicorn.run(create_app(settings=settings), host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    main()
