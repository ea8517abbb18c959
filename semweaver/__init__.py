"""Loggers, diagnostics, policy violations, diffs and generated-module assembly for semantic convention tooling."""

__version__ = "0.1.0"

__all__ = ["checker", "codegen", "diagnostic", "diff", "errors", "loggers"]