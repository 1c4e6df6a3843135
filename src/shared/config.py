import os
from dataclasses import dataclass, field
from datetime import tzinfo
from functools import lru_cache
from typing import FrozenSet, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.specs.common.enums import CurationOrder
from src.specs.common.errors import ConfigurationError


@dataclass(frozen=True)
class SiteConfig:
    cosmos_connection_string: Optional[str] = None
    cosmos_database: Optional[str] = None
    site_timezone: Optional[tzinfo] = None  # None means the host's local zone
    curation_order: CurationOrder = CurationOrder.SCAN
    admin_principals: FrozenSet[str] = field(default_factory=frozenset)
    blob_connection_string: Optional[str] = None
    blob_container: str = "images"

    def require_cosmos(self) -> None:
        missing = [
            k for k, v in [
                ("COSMOS_DB_CONNECTION_STRING", self.cosmos_connection_string),
                ("COSMOS_DB_NAME", self.cosmos_database),
            ]
            if not v
        ]
        if missing:
            raise ConfigurationError(
                f"Missing Cosmos env vars: {', '.join(missing)}",
                details={"missing": missing},
            )


def _parse_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown SITE_TIMEZONE '{name}'") from exc


def _parse_curation_order(value: Optional[str]) -> CurationOrder:
    if not value:
        return CurationOrder.SCAN
    try:
        return CurationOrder(value.strip().lower())
    except ValueError as exc:
        raise ConfigurationError(
            f"FEATURED_CURATION_ORDER must be one of {[o.value for o in CurationOrder]}"
        ) from exc


def load_site_config() -> SiteConfig:
    """Build a SiteConfig from the process environment."""
    principals = os.getenv("ADMIN_PRINCIPALS") or ""
    return SiteConfig(
        cosmos_connection_string=os.getenv("COSMOS_DB_CONNECTION_STRING"),
        cosmos_database=os.getenv("COSMOS_DB_NAME"),
        site_timezone=_parse_timezone(os.getenv("SITE_TIMEZONE")),
        curation_order=_parse_curation_order(os.getenv("FEATURED_CURATION_ORDER")),
        admin_principals=frozenset(p.strip().lower() for p in principals.split(",") if p.strip()),
        blob_connection_string=os.getenv("PUBLIC_BLOB_CONNECTION_STRING"),
        blob_container=os.getenv("PUBLIC_BLOB_CONTAINER", "images"),
    )


@lru_cache(maxsize=1)
def get_site_config() -> SiteConfig:
    """Get or create the process-wide SiteConfig"""
    return load_site_config()
