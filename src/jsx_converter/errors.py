"""Exception hierarchy for the conversion pipeline."""

from __future__ import annotations


class ConverterError(Exception):
    """Base error for conversion, verification and deployment failures."""

    exit_code: int = 1


class ConfigError(ConverterError):
    """Invalid pipeline configuration or environment."""

    exit_code = 2


class StructureError(ConverterError):
    """A required source file or directory is missing."""

    exit_code = 3


class CopyError(ConverterError):
    """Copying the project tree into the staging directory failed."""

    exit_code = 4


class CompilerError(ConverterError):
    """The TypeScript compiler produced no output, even after the retry."""

    exit_code = 5


class RewriteError(ConverterError):
    """A structured rewrite (JSON metadata) could not be applied."""

    exit_code = 6


class DeployError(ConverterError):
    """Publishing the staging tree to the template repository failed."""

    exit_code = 7
