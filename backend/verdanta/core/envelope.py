# backend/verdanta/core/envelope.py
"""
Uniform JSON envelope returned by every endpoint:

    {success, data, metadata?, timestamp, error?, message?}

Route handlers build successful bodies with `ok()` and catch unexpected
exceptions with `failure()`. Validation and auth errors are HTTPExceptions
rendered into the same shape by the handlers installed in main.py.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from verdanta.core.logger import logger


def utc_timestamp() -> str:
    return datetime.utcnow().isoformat() + "Z"


def ok(data: Any = None, metadata: Optional[Dict[str, Any]] = None, message: Optional[str] = None, **extra) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    body.update(extra)
    body["data"] = data
    if metadata is not None:
        body["metadata"] = metadata
    if message is not None:
        body["message"] = message
    body["timestamp"] = utc_timestamp()
    return body


def failure(
    error: str,
    exc: Optional[BaseException] = None,
    status_code: int = 500,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "error": error}
    if exc is not None:
        body["message"] = str(exc) or exc.__class__.__name__
    body["timestamp"] = utc_timestamp()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


# ------------------------------------------------
# VALIDATION ERRORS
# ------------------------------------------------
class MissingFieldError(HTTPException):
    def __init__(self, *fields: str):
        self.fields = list(fields)
        label = "field" if len(fields) == 1 else "fields"
        super().__init__(status_code=400, detail=f"Missing required {label}: {', '.join(fields)}")


class InvalidParameterError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


def require_fields(**fields: Any) -> None:
    """Raise MissingFieldError naming every empty or absent field, in call order."""
    missing = [name for name, value in fields.items() if value is None or value == ""]
    if missing:
        raise MissingFieldError(*missing)


def require_array(value: Any, name: str, item_type: type = str, required: bool = False) -> None:
    """400 unless value is a list of item_type; None passes unless required."""
    if value is None and not required:
        return
    if not isinstance(value, list):
        raise InvalidParameterError(f"{name} must be an array")
    # bools are ints; rejected too
    if any(not isinstance(v, item_type) or isinstance(v, bool) for v in value):
        kind = "strings" if item_type is str else "integers"
        raise InvalidParameterError(f"{name} must contain only {kind}")


# ------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.detail}", extra={"path": request.url.path})
    return failure(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            fields.append(".".join(loc))

    if fields:
        error = f"Invalid or missing fields: {', '.join(dict.fromkeys(fields))}"
    else:
        error = "Invalid request body"
    return failure(error, status_code=400)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
