"""Render ``sitemap.xml`` from the content store and the calculator catalog.

The sitemap lists static routes, one page per category, one page per
calculator (``/<category>/<calculator>``), and one page per guide
(``/guides/<slug>``). Guides carry their ``updated_at`` date as ``lastmod``;
every other route uses the build date.

>>> from pathlib import Path
>>> from metrickit_content.catalogs import load_catalog
>>> from metrickit_content.content import default_store
>>> from metrickit_content.settings import load_site_settings
>>> settings = load_site_settings(Path("config/site.yaml"))  # doctest: +SKIP
>>> builder = SitemapBuilder(settings, default_store(), load_catalog(settings.catalog_path))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
PosixPath('public/sitemap.xml')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    from .catalogs import CatalogSnapshot
    from .content import ContentStore
    from .settings import SiteSettings


@dc.dataclass(frozen=True, slots=True)
class SitemapEntry:
    """A single ``<url>`` element."""

    loc: str
    lastmod: str


class SitemapBuilder:
    """Render the sitemap for every routable page."""

    def __init__(
        self,
        settings: SiteSettings,
        store: ContentStore,
        catalog: CatalogSnapshot,
        *,
        templates_dir: Path | None = None,
        today: dt.date | None = None,
    ) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        settings : SiteSettings
            Supplies the site origin, static routes and output path.
        store : ContentStore
            Guide corpus; each guide becomes one ``/guides/<slug>`` entry.
        catalog : CatalogSnapshot
            Calculator catalog used for calculator routes.
        templates_dir : Path, optional
            Directory holding ``sitemap.xml.jinja``. Defaults to the package
            ``templates`` directory.
        today : date, optional
            ``lastmod`` for non-guide routes. Defaults to the current UTC date.
        """
        self.settings = settings
        self.store = store
        self.catalog = catalog
        self.today = today or dt.datetime.now(dt.UTC).date()
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("sitemap.xml.jinja")

    def _url(self, path: str) -> str:
        return f"{self.settings.site_url}{path}"

    def entries(self) -> list[SitemapEntry]:
        """Return sitemap entries in output order."""
        today = self.today.isoformat()
        entries = [
            SitemapEntry(self._url(route), today) for route in self.settings.static_routes
        ]
        entries.extend(
            SitemapEntry(self._url(f"/{category}"), today)
            for category in self.store.categories()
        )
        entries.extend(
            SitemapEntry(self._url(f"/{entry.category}/{entry.slug}"), today)
            for entry in self.catalog.calculators
        )
        entries.extend(
            SitemapEntry(self._url(f"/guides/{guide.slug}"), guide.updated_at)
            for guide in self.store.list_guides()
        )
        return entries

    def render(self) -> str:
        """Render the sitemap XML document."""
        xml = self.template.render(entries=self.entries())
        if not xml.endswith("\n"):
            xml += "\n"
        return xml

    def run(self, output: Path | None = None) -> Path:
        """Write the sitemap and return the output path."""
        output_path = output or self.settings.sitemap_output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path


__all__ = ["SitemapBuilder", "SitemapEntry"]
