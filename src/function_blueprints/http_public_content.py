import azure.functions as func

from src.content.registry import execute_query, list_query_defs
from src.shared.cosmos_client import get_document_store
from src.shared.document_store import DocumentStore
from src.shared.http_utils import error_response, json_response, model_params, status_for
from src.shared.logging_utils import info as log_info
from src.specs.common.errors import PortfolioError
from src.specs.models.http import ErrorResponse

bp = func.Blueprint()

_INPUT_MODELS = {d.name: d.input_model for d in list_query_defs()}


async def handle_public_query(req: func.HttpRequest, query_name: str, store: DocumentStore = None) -> func.HttpResponse:
    """Serve a named public query as plain REST: variables from the query string, data as the body."""
    log_info(None, "public:request", query=query_name, url=req.url)
    try:
        store = store or get_document_store()
    except PortfolioError as exc:
        return error_response(exc)

    variables = model_params(req, _INPUT_MODELS[query_name])
    result = await execute_query(store, query_name, variables)
    if result.status == "completed":
        return json_response(result.data)

    first = result.errors[0]
    err = ErrorResponse(message=first.message, errorCode=first.code, details=first.details)
    return json_response(err, status_for(first.code))


@bp.function_name(name="get_featured")
@bp.route(route="featured", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_featured(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getFeaturedContent")


@bp.function_name(name="get_upcoming_events")
@bp.route(route="events/upcoming", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_upcoming_events(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getUpcomingEvents")


@bp.function_name(name="get_past_events")
@bp.route(route="events/past", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_past_events(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getPastEvents")


@bp.function_name(name="get_recent_posts")
@bp.route(route="posts/recent", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_recent_posts(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getRecentPosts")


@bp.function_name(name="get_featured_music")
@bp.route(route="music/featured", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_featured_music(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getFeaturedMusic")


@bp.function_name(name="get_music_catalog")
@bp.route(route="music", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_music_catalog(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getMusicCatalog")


@bp.function_name(name="get_videos")
@bp.route(route="videos", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_videos(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getVideos")


@bp.function_name(name="get_social_links")
@bp.route(route="social-links", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_social_links(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getSocialLinks")


@bp.function_name(name="get_profile")
@bp.route(route="profile", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_profile(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_public_query(req, "getProfile")
