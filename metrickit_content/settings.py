"""Load ``config/site.yaml`` into typed settings."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

DEFAULT_SITE_URL = "http://localhost:3000"
DEFAULT_STATIC_ROUTES = ("/", "/about", "/privacy", "/terms", "/contact", "/guides")


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteSettings:
    """Site-wide values consumed by the CLI and the sitemap builder.

    Attributes
    ----------
    name : str
        Site display name.
    site_url : str
        Canonical origin without a trailing slash.
    sitemap_output : Path
        Where ``sitemap.xml`` is written.
    static_routes : tuple[str, ...]
        Fixed routes listed ahead of category, calculator and guide routes.
    catalog_path : Path
        Calculator and glossary catalog export.
    data_dir : Path | None
        Alternative content directory; ``None`` uses the packaged content.
    """

    name: str = "MetricKit"
    site_url: str = DEFAULT_SITE_URL
    sitemap_output: Path = Path("public/sitemap.xml")
    static_routes: tuple[str, ...] = DEFAULT_STATIC_ROUTES
    catalog_path: Path = Path("config/catalog.yaml")
    data_dir: Path | None = None


def _normalize_site_url(value: object) -> str:
    text = str(value or "").strip().rstrip("/")
    if not text.startswith(("http://", "https://")):
        msg = f"Site URL must be an absolute http(s) URL, got {value!r}."
        raise SiteConfigError(msg)
    return text


def _normalize_routes(value: object) -> tuple[str, ...]:
    match value:
        case None:
            return DEFAULT_STATIC_ROUTES
        case list() as routes:
            normalized = tuple(str(route).strip() for route in routes)
        case _:
            msg = "'static_routes' must be a list of paths."
            raise SiteConfigError(msg)
    for route in normalized:
        if not route.startswith("/"):
            msg = f"Static route '{route}' must start with '/'."
            raise SiteConfigError(msg)
    return normalized


def load_site_settings(path: Path, *, site_url: str | None = None) -> SiteSettings:
    """Load site settings, applying an optional ``site_url`` override.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    SiteConfigError
        If a value is present but invalid.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    site = raw.get("site") or {}
    content = raw.get("content") or {}
    if not isinstance(site, dict) or not isinstance(content, dict):
        msg = "'site' and 'content' sections must be mappings."
        raise SiteConfigError(msg)

    base = SiteSettings()
    data_dir = content.get("data_dir")
    return SiteSettings(
        name=str(site.get("name", base.name)),
        site_url=_normalize_site_url(site_url or site.get("url", base.site_url)),
        sitemap_output=Path(site.get("sitemap_output", base.sitemap_output)),
        static_routes=_normalize_routes(site.get("static_routes")),
        catalog_path=Path(content.get("catalog", base.catalog_path)),
        data_dir=Path(data_dir) if data_dir else None,
    )


__all__ = ["SiteConfigError", "SiteSettings", "load_site_settings"]
