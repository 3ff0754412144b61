from datetime import datetime
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def _envelope(ok: bool, message: str, data: Any = None, errors: Any = None) -> Dict[str, Any]:
    return {
        "success": ok,
        "message": message,
        "data": data,
        "errors": errors,
    }


def success(
    data: Optional[Any] = None,
    message: str = "Success",
    meta: Optional[Dict] = None,
):
    """Successful envelope; cart lines keep their camelCase aliases."""
    response = _envelope(True, message, data=data)
    if meta is not None:
        response["meta"] = meta
    return jsonable_encoder(response, by_alias=True)


def error(
    message: str = "Error",
    errors: Optional[Any] = None,
    status_code: int = 400,
) -> JSONResponse:
    """Failure envelope shared by route early-returns and the app's exception handlers."""
    content = _envelope(False, message, errors=errors if errors is not None else [])
    content["timestamp"] = f"{datetime.utcnow().isoformat()}Z"
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def paginated_response(items, total: int, page: int, limit: int):
    pages = (total + limit - 1) // limit if limit else 0
    return success(
        data=items,
        meta={"total": total, "page": page, "limit": limit, "total_pages": pages},
    )
