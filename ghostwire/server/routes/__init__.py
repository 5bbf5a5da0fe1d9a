"""API Routes Package."""

from ghostwire.server.routes import collections, history, requests, transfer

__all__ = ["collections", "history", "requests", "transfer"]
