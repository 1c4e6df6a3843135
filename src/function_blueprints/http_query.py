import azure.functions as func
from pydantic import ValidationError

from src.content.registry import execute_query
from src.shared.cosmos_client import get_document_store
from src.shared.document_store import DocumentStore
from src.shared.http_utils import error_response, json_response, parse_json_body
from src.shared.logging_utils import timed
from src.specs.common.errors import FormValidationError, PortfolioError
from src.specs.models.forms import field_errors
from src.specs.models.queries import QueryRequest

bp = func.Blueprint()

# Correlation id from the caller or front end, when one is sent
REQUEST_ID_HEADER = "x-ms-request-id"


async def handle_query(req: func.HttpRequest, store: DocumentStore = None) -> func.HttpResponse:
    """``{"query": name, "variables": {...}}`` in, ``{"status", "data"}`` or ``{"status", "errors"}`` out.

    Errors raised while executing a query are reported in the body with
    status 200; only a malformed request is rejected with 400.
    """
    try:
        data = parse_json_body(req)
        try:
            parsed = QueryRequest.model_validate(data)
        except ValidationError as exc:
            raise FormValidationError(field_errors(exc)) from exc
        store = store or get_document_store()
    except PortfolioError as exc:
        return error_response(exc)

    with timed(req.headers.get(REQUEST_ID_HEADER), "query:served", query=parsed.query) as dims:
        result = await execute_query(store, parsed.query, parsed.variables)
        dims["status"] = result.status
    return json_response(result.model_dump(exclude_none=True))


@bp.function_name(name="query")
@bp.route(route="query", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
async def query(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_query(req)
