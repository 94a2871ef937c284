"""Error handlers - map domain exceptions to structured JSON responses."""

import falcon
import falcon.asgi
import pydantic
import structlog

from brandstage.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BrandStageError,
    ConflictError,
    NotFound,
    StateError,
    ValidationError,
)

logger = structlog.get_logger()

_STATUS = {
    AuthenticationError: falcon.HTTP_401,
    AuthorizationError: falcon.HTTP_403,
    NotFound: falcon.HTTP_404,
    ConflictError: falcon.HTTP_409,
    ValidationError: falcon.HTTP_400,
    StateError: falcon.HTTP_409,
}


def status_for(ex: BrandStageError) -> str:
    for cls in type(ex).__mro__:
        if cls in _STATUS:
            return _STATUS[cls]
    return falcon.HTTP_500


def error_body(ex: BrandStageError) -> dict:
    error: dict = {"kind": ex.kind, "message": ex.message}
    if isinstance(ex, ConflictError) and ex.existing_id:
        error["existing_id"] = str(ex.existing_id)
    if isinstance(ex, NotFound):
        error["resource"] = ex.resource
    return {"error": error}


async def handle_brandstage_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: BrandStageError, params: dict
) -> None:
    resp.status = status_for(ex)
    resp.media = error_body(ex)
    if isinstance(ex, AuthenticationError):
        resp.set_header("WWW-Authenticate", "Bearer")
    if resp.status == falcon.HTTP_500:
        logger.error("unmapped_domain_error", kind=ex.kind, message=ex.message, path=req.path)


async def handle_request_validation_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: pydantic.ValidationError, params: dict
) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {
        "error": {
            "kind": ValidationError.kind,
            "message": "Invalid request body",
            "details": [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in ex.errors()
            ],
        }
    }


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    logger.exception("unhandled_error", method=req.method, path=req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": {"kind": "internal", "message": "Internal server error"}}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers; Falcon picks the most specific one per exception."""
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(pydantic.ValidationError, handle_request_validation_error)
    app.add_error_handler(BrandStageError, handle_brandstage_error)
