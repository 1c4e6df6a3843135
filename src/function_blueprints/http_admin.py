"""
Admin HTTP surface under ``/api/manage``.

Every route needs a function key and a signed-in principal allowed by
``ADMIN_PRINCIPALS``. Handlers are plain coroutines taking the request and
an optional store so they can be driven directly.
"""
from typing import Awaitable, Callable, Optional

import azure.functions as func

from src.content import admin_content
from src.content.featured_settings import load_featured_settings, save_featured_settings, toggle_featured
from src.content.messages import count_unread, list_messages, toggle_read
from src.shared.auth import require_admin
from src.shared.blob_store import upload_image
from src.shared.cosmos_client import get_document_store
from src.shared.document_store import DocumentStore
from src.shared.http_utils import error_response, json_response, parse_json_body
from src.shared.logging_utils import info as log_info
from src.specs.common.enums import FeaturedCategory, StoragePath
from src.specs.common.errors import FormValidationError, PortfolioError
from src.specs.models.domain import FeaturedSettings
from src.specs.models.forms import FeaturedSettingsForm, validate_form
from src.specs.models.http import (
    DocumentListResponse,
    MessagesResponse,
    MutationResponse,
    UploadResponse,
)

bp = func.Blueprint()

Action = Callable[[DocumentStore], Awaitable[func.HttpResponse]]


async def _as_admin(req: func.HttpRequest, store: Optional[DocumentStore], action: Action) -> func.HttpResponse:
    try:
        principal = require_admin(req)
        log_info(None, "admin:request", principal=principal, method=req.method, url=req.url)
        return await action(store or get_document_store())
    except PortfolioError as exc:
        return error_response(exc)


# Featured curation

async def handle_featured_settings(req: func.HttpRequest, store: Optional[DocumentStore] = None) -> func.HttpResponse:
    async def action(store: DocumentStore) -> func.HttpResponse:
        if req.method.upper() == "PUT":
            form = validate_form(FeaturedSettingsForm, parse_json_body(req))
            settings = FeaturedSettings(**form.model_dump())
            await save_featured_settings(store, settings, is_admin=True)
        else:
            settings = await load_featured_settings(store) or FeaturedSettings()
        return json_response(settings)

    return await _as_admin(req, store, action)


async def handle_toggle_featured(req: func.HttpRequest, store: Optional[DocumentStore] = None) -> func.HttpResponse:
    async def action(store: DocumentStore) -> func.HttpResponse:
        body = parse_json_body(req)
        body = body if isinstance(body, dict) else {}
        item_id = body.get("id")
        try:
            category = FeaturedCategory(body.get("category"))
        except ValueError as exc:
            raise FormValidationError(
                [{"field": "category", "message": f"must be one of {[c.value for c in FeaturedCategory]}"}]
            ) from exc
        if not isinstance(item_id, str) or not item_id:
            raise FormValidationError([{"field": "id", "message": "is required"}])
        current = await load_featured_settings(store) or FeaturedSettings()
        updated = toggle_featured(current, category, item_id)
        await save_featured_settings(store, updated, is_admin=True)
        return json_response(updated)

    return await _as_admin(req, store, action)


# Content CRUD

async def handle_collection(req: func.HttpRequest, store: Optional[DocumentStore] = None) -> func.HttpResponse:
    collection = req.route_params.get("collection", "")

    async def action(store: DocumentStore) -> func.HttpResponse:
        if req.method.upper() == "POST":
            doc_id = await admin_content.create_document(store, collection, parse_json_body(req))
            return json_response(MutationResponse(success=True, id=doc_id, message="Created"), 201)
        docs = await admin_content.list_documents(store, collection)
        return json_response(DocumentListResponse(items=docs, count=len(docs)))

    return await _as_admin(req, store, action)


async def handle_document(req: func.HttpRequest, store: Optional[DocumentStore] = None) -> func.HttpResponse:
    collection = req.route_params.get("collection", "")
    doc_id = req.route_params.get("id", "")

    async def action(store: DocumentStore) -> func.HttpResponse:
        if req.method.upper() == "DELETE":
            await admin_content.delete_document(store, collection, doc_id)
            return json_response(MutationResponse(success=True, id=doc_id, message="Deleted"))
        await admin_content.update_document(store, collection, doc_id, parse_json_body(req))
        return json_response(MutationResponse(success=True, id=doc_id, message="Updated"))

    return await _as_admin(req, store, action)


# Contact messages

async def handle_messages(req: func.HttpRequest, store: Optional[DocumentStore] = None) -> func.HttpResponse:
    async def action(store: DocumentStore) -> func.HttpResponse:
        messages = await list_messages(store)
        resp = MessagesResponse(
            items=[m.model_dump(mode="json") for m in messages],
            unread=count_unread(messages),
        )
        return json_response(resp)

    return await _as_admin(req, store, action)


async def handle_toggle_read(req: func.HttpRequest, store: Optional[DocumentStore] = None) -> func.HttpResponse:
    message_id = req.route_params.get("id", "")

    async def action(store: DocumentStore) -> func.HttpResponse:
        message = await toggle_read(store, message_id)
        state = "read" if message.isRead else "unread"
        return json_response(MutationResponse(success=True, id=message_id, message=f"Marked as {state}"))

    return await _as_admin(req, store, action)


# Image uploads

async def handle_upload(req: func.HttpRequest) -> func.HttpResponse:
    """Raw image bytes in the body; ``filename`` from the query string or ``x-filename`` header."""
    try:
        require_admin(req)
        try:
            folder = StoragePath(req.route_params.get("folder", ""))
        except ValueError as exc:
            raise FormValidationError(
                [{"field": "folder", "message": f"must be one of {[p.value for p in StoragePath]}"}]
            ) from exc
        filename = req.params.get("filename") or req.headers.get("x-filename") or "upload"
        url = await upload_image(
            folder=folder,
            filename=filename,
            data=req.get_body() or b"",
            content_type=req.headers.get("content-type"),
        )
    except PortfolioError as exc:
        return error_response(exc)
    return json_response(UploadResponse(url=url, folder=folder.value), 201)


@bp.function_name(name="manage_featured")
@bp.route(route="manage/featured", methods=["GET", "PUT"], auth_level=func.AuthLevel.FUNCTION)
async def manage_featured(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_featured_settings(req)


@bp.function_name(name="manage_featured_toggle")
@bp.route(route="manage/featured/toggle", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
async def manage_featured_toggle(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_toggle_featured(req)


@bp.function_name(name="manage_collection")
@bp.route(route="manage/content/{collection}", methods=["GET", "POST"], auth_level=func.AuthLevel.FUNCTION)
async def manage_collection(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_collection(req)


@bp.function_name(name="manage_document")
@bp.route(route="manage/content/{collection}/{id}", methods=["PUT", "DELETE"], auth_level=func.AuthLevel.FUNCTION)
async def manage_document(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_document(req)


@bp.function_name(name="manage_messages")
@bp.route(route="manage/messages", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
async def manage_messages(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_messages(req)


@bp.function_name(name="manage_message_toggle_read")
@bp.route(route="manage/messages/{id}/toggle-read", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
async def manage_message_toggle_read(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_toggle_read(req)


@bp.function_name(name="manage_upload")
@bp.route(route="manage/uploads/{folder}", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
async def manage_upload(req: func.HttpRequest) -> func.HttpResponse:
    return await handle_upload(req)
