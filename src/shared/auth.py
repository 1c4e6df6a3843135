"""
Admin gate for HTTP requests authenticated by App Service / Static Web Apps.

The platform injects ``x-ms-client-principal`` (base64 JSON) and
``x-ms-client-principal-name`` once a user has signed in; requests without
them are anonymous.
"""
import base64
import binascii
import json
from typing import Any, Dict, Optional

import azure.functions as func

from src.shared.config import get_site_config
from src.shared.logging_utils import warning as log_warning
from src.specs.common.errors import AuthorizationError

PRINCIPAL_HEADER = "x-ms-client-principal"
PRINCIPAL_NAME_HEADER = "x-ms-client-principal-name"
_NAME_CLAIMS = ("name", "preferred_username", "emails", "email")


def _decode_principal(raw: str) -> Optional[Dict[str, Any]]:
    try:
        padded = raw + "=" * (-len(raw) % 4)
        data = json.loads(base64.b64decode(padded).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        log_warning(None, "auth:bad_principal", error=str(exc))
        return None
    return data if isinstance(data, dict) else None


def principal_name(req: func.HttpRequest) -> Optional[str]:
    """Return the signed-in principal's name, or None when the request is anonymous."""
    name = req.headers.get(PRINCIPAL_NAME_HEADER)
    if name:
        return name.strip()
    raw = req.headers.get(PRINCIPAL_HEADER)
    if not raw:
        return None
    principal = _decode_principal(raw)
    if principal is None:
        return None
    # Static Web Apps shape
    if principal.get("userDetails"):
        return str(principal["userDetails"]).strip()
    # App Service shape
    for claim in principal.get("claims") or []:
        if isinstance(claim, dict) and claim.get("typ") in _NAME_CLAIMS and claim.get("val"):
            return str(claim["val"]).strip()
    return None


def is_admin_authenticated(req: func.HttpRequest) -> bool:
    name = principal_name(req)
    if not name:
        return False
    allowed = get_site_config().admin_principals
    return not allowed or name.lower() in allowed


def require_admin(req: func.HttpRequest) -> str:
    """Return the admin principal name or raise AuthorizationError."""
    if not is_admin_authenticated(req):
        raise AuthorizationError()
    return principal_name(req) or ""
