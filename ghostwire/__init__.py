"""Ghostwire - HTTP request workbench for the httpcli executor."""

__version__ = "0.1.0"
