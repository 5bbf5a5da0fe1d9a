"""Ghostwire API Server.

FastAPI backend providing the REST API for the desktop UI.
"""

from ghostwire.server.app import app, create_app
from ghostwire.server.state import get_workbench, set_workbench

__all__ = [
    "app",
    "create_app",
    "get_workbench",
    "set_workbench",
]
