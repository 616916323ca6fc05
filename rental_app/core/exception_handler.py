from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc) -> str:
    parts = [
        str(part)
        for part in (loc or ())
        if not isinstance(part, int) and part not in LOCATION_PREFIXES
    ]
    return ".".join(parts) or "body"


class ValidationErrorHandler:
    async def __call__(self, request: Request, exc: RequestValidationError):

        errors = []

        for err in exc.errors():
            errors.append({
                "loc": list(err.get("loc") or ()),
                "msg": str(err.get("msg")),
                "type": err.get("type"),
            })

        first = errors[0] if errors else {"loc": [], "msg": "", "type": ""}
        field = _field_name(first["loc"])
        if first["type"] == "missing":
            message = f"Missing required field: {field}"
        else:
            message = f"Invalid value for {field}: {first['msg']}"

        return JSONResponse(
            status_code=400,
            content={
                "error": message,
                "details": errors,
            },
        )


class HTTPErrorHandler:
    async def __call__(self, request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
