"""Process-wide workbench used by the API routes."""

from __future__ import annotations

from ghostwire.config import get_config
from ghostwire.engine import Workbench
from ghostwire.runtime import HttpCliExecutor
from ghostwire.storage import get_store

# Global instances
_workbench: Workbench | None = None


def get_workbench() -> Workbench:
    """Get the global workbench."""
    global _workbench
    if _workbench is None:
        _workbench = Workbench(
            store=get_store(),
            executor=HttpCliExecutor(get_config().executable),
        )
    return _workbench


def set_workbench(workbench: Workbench | None) -> None:
    """Set (or reset) the global workbench."""
    global _workbench
    _workbench = workbench
