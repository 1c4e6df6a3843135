import azure.functions as func

from src.content.messages import submit_contact_message
from src.shared.cosmos_client import get_document_store
from src.shared.document_store import DocumentStore
from src.shared.http_utils import error_response, json_response, parse_json_body
from src.specs.common.errors import PortfolioError
from src.specs.models.http import MutationResponse

bp = func.Blueprint()


async def handle_contact(req: func.HttpRequest, store: DocumentStore = None) -> func.HttpResponse:
    try:
        data = parse_json_body(req)
        store = store or get_document_store()
        message_id = await submit_contact_message(store, data)
    except PortfolioError as exc:
        return error_response(exc)
    resp = MutationResponse(
        success=True,
        id=message_id,
        message="Thank you for your message! I'll get back to you soon.",
    )
    return json_response(resp, 201)


@bp.function_name(name="submit_contact")
@bp.route(route="contact", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
async def submit_contact(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_contact(req)
