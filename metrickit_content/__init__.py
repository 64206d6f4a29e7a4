"""Guide content, category intros, and reference checks for MetricKit calculators.

This package exposes the CLI entry points used by ``uv run content`` in CI to
validate guide cross-references and to write the sitemap, plus the content
store consumed by page rendering and search indexing.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from metrickit_content import main
>>> main()  # doctest: +SKIP
>>> from metrickit_content import app
>>> app(["validate", "--strict"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
