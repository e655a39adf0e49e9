"""Result envelope shared by every endpoint.

Each operation answers ``{"success": true, ...fields}`` or
``{"success": false, "error": "...", "error_code": "..."}``; faults never
escape as bare exceptions.
"""

import logging
from typing import Any, Awaitable, Dict

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..exceptions import CatalogError, InternalError

logger = logging.getLogger(__name__)


def success(status_code: int = 200, **fields: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, **jsonable_encoder(fields)})


def failure(error: CatalogError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.message, "error_code": error.code},
    )


async def respond(operation: Awaitable[Dict[str, Any]], status_code: int = 200) -> JSONResponse:
    """Await an operation and wrap its outcome in the envelope."""
    try:
        fields = await operation
    except CatalogError as e:
        logger.info(f"Operation failed ({e.code}): {e.message}")
        return failure(e)
    except Exception as e:
        logger.exception("Unexpected error while handling request")
        return failure(InternalError(str(e) or e.__class__.__name__))
    return success(status_code=status_code, **fields)
