"""Mutable handle shared by all stages of one conversion run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jsx_converter.application.results import CompileResult, ConversionStats
from jsx_converter.schemas import ConversionConfig


@dataclass
class StagingTree:
    """Resolved paths for one run plus the state stages hand to each other.

    Parameters
    ----------
    config : ConversionConfig
        Validated pipeline configuration.
    """

    config: ConversionConfig
    compile_result: CompileResult | None = None
    renamed: list[Path] = field(default_factory=list)
    file_errors: list[str] = field(default_factory=list)
    stats: ConversionStats | None = None

    @property
    def source_root(self) -> Path:
        return self.config.source_root

    @property
    def root(self) -> Path:
        return self.config.source_root / self.config.staging_dir_name

    @property
    def source_scripts(self) -> Path:
        return self.source_root / self.config.scripts_dir

    @property
    def scripts(self) -> Path:
        return self.root / self.config.scripts_dir

    @property
    def intermediate(self) -> Path:
        return self.root / self.config.intermediate_dir_name

    @property
    def transient_config(self) -> Path:
        return self.root / self.config.transient_config_name

    def path(self, relative: str) -> Path:
        """Resolve a path inside the staging tree."""
        return self.root / relative

    def record_error(self, message: str) -> None:
        """Remember a per-file failure that did not halt the stage."""
        self.file_errors.append(message)
