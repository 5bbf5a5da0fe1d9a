"""Ghostwire Engine - the request workbench."""

from ghostwire.engine.workbench import EXPORT_FILENAME, ImportResult, Workbench

__all__ = ["EXPORT_FILENAME", "ImportResult", "Workbench"]
