import json
from typing import Any, Dict, Optional, Type

import azure.functions as func
from pydantic import BaseModel

from src.shared.logging_utils import error as log_error
from src.specs.common.errors import FormValidationError, PortfolioError
from src.specs.models.http import ErrorResponse, FieldError

# Error code -> HTTP status
STATUS_BY_CODE: Dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNKNOWN_QUERY": 400,
    "UNAUTHORIZED": 401,
    "RESOURCE_NOT_FOUND": 404,
    "CONTENT_UNAVAILABLE": 503,
    "STORE_UNAVAILABLE": 503,
    "CONFIGURATION_ERROR": 500,
}


def status_for(code: Optional[str]) -> int:
    return STATUS_BY_CODE.get(code or "", 500)


def json_response(payload: Any, status_code: int = 200) -> func.HttpResponse:
    if isinstance(payload, BaseModel):
        body = payload.model_dump_json()
    else:
        body = json.dumps(payload)
    return func.HttpResponse(body=body, mimetype="application/json", status_code=status_code)


def error_response(exc: PortfolioError) -> func.HttpResponse:
    status = status_for(exc.code)
    if status >= 500:
        log_error(None, "http:error", code=exc.code, error=str(exc))
    err = ErrorResponse(
        message=str(exc),
        errorCode=exc.code,
        details=exc.details or None,
        fieldErrors=[FieldError(**f) for f in exc.field_errors] if isinstance(exc, FormValidationError) else None,
    )
    return json_response(err, status)


def parse_json_body(req: func.HttpRequest) -> Any:
    try:
        return req.get_json()
    except ValueError as exc:
        raise FormValidationError([{"field": "__root__", "message": "Invalid JSON body"}]) from exc


def model_params(req: func.HttpRequest, model: Type[BaseModel]) -> Dict[str, Any]:
    """Query string parameters that are fields of ``model``; others (e.g. ``code``) are ignored."""
    return {k: v for k, v in req.params.items() if k in model.model_fields}
