"""Convert a TypeScript React starter kit into a JavaScript/JSX template."""

from __future__ import annotations

from pathlib import Path

from jsx_converter.application.results import ConversionResult

__version__ = "0.1.0"


def convert_project(source_root: Path | str = ".", **overrides: object) -> ConversionResult:
    """Convert the project at ``source_root`` into ``<source_root>/output``.

    Parameters
    ----------
    source_root : Path | str, default="."
        Project root containing ``resources/js``.
    **overrides : object
        Field overrides for :class:`jsx_converter.schemas.ConversionConfig`.

    Returns
    -------
    ConversionResult
        Staging location, compiler outcome and statistics.
    """
    from .application.use_cases import build_conversion_config, convert_project as _impl

    return _impl(build_conversion_config(Path(source_root), **overrides))


__all__ = ["convert_project"]
