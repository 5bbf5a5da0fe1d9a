"""Request Workbench.

Holds the live editor request and ties the pieces together: argument
synthesis, the executor, output parsing, history, collections and
import/export. Every failure is converted into a response or an
``ImportResult`` here; nothing propagates to the host.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ghostwire.converters import (
    ImportFailure,
    export_postman,
    parse_import_document,
    read_import_file,
)
from ghostwire.core import build_arguments, effective_headers, parse_verbose_output
from ghostwire.models import RequestModel, ResponseModel
from ghostwire.runtime import Executor
from ghostwire.storage import CollectionStore

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "collections.json"


@dataclass
class ImportResult:
    """Outcome of an import, phrased for the user."""

    success: bool
    message: str = ""
    count: int = 0
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "count": self.count,
            "cancelled": self.cancelled,
        }


class Workbench:
    """The editor session.

    ``send`` is the only coroutine. The host is expected to disable its
    send trigger while ``in_flight`` is set; no lock is taken here.
    """

    def __init__(self, store: CollectionStore, executor: Executor):
        self.store = store
        self.executor = executor
        self.request = RequestModel.initial()
        self.response: ResponseModel | None = None
        self.in_flight = False

    # ==================== Editor ====================

    def new_request(self) -> RequestModel:
        """Reset the editor to a blank request."""
        self.request = RequestModel.blank()
        return self.request

    def set_request(self, request: RequestModel) -> RequestModel:
        """Replace the editor request with a copy of ``request``."""
        self.request = request.copy()
        return self.request

    def open_history_entry(self, request_id: int) -> RequestModel | None:
        entry = self.store.find_history_entry(request_id)
        if entry is None:
            return None
        return self.set_request(entry)

    def open_collection_request(self, collection_id: int, request_id: int) -> RequestModel | None:
        stored = self.store.find_request(collection_id, request_id)
        if stored is None:
            return None
        return self.set_request(stored)

    def save_to_collection(self, collection_id: int, name: str) -> RequestModel | None:
        """Save a copy of the editor request into a collection."""
        return self.store.add_request(collection_id, self.request, name)

    # ==================== Send ====================

    def arguments(self, scan: bool = False) -> list[str]:
        """Executor tokens for the current editor request."""
        return build_arguments(self.request, scan=scan)

    async def send(self, scan: bool = False) -> ResponseModel:
        """Dispatch the editor request and build a response.

        On success the request is recorded in history. Executor failures
        produce an ``Error`` response and dispatch failures a ``Failed``
        one; neither is recorded.
        """
        self.in_flight = True
        self.response = None

        request = self.request.copy()
        request_headers = effective_headers(request)
        args = build_arguments(request, scan=scan)

        try:
            result = await self.executor.execute(args)
        except Exception as e:
            logger.exception(f"Dispatch failed: {e}")
            response = ResponseModel(
                status="Failed",
                time="0",
                size="0",
                body=str(e),
                error=str(e),
                full_output="",
            )
        else:
            if result.failed:
                response = ResponseModel(
                    status="Error",
                    time="0",
                    size="0",
                    request_headers=request_headers,
                    body=result.stderr or result.error or "",
                    error=result.error,
                    full_output=result.stdout or result.stderr or "",
                )
            else:
                parsed = parse_verbose_output(result.stdout)
                response = ResponseModel.from_parsed(
                    parsed,
                    request_headers=request_headers,
                    full_output=result.stdout,
                )
                self.store.append_history(request)
        finally:
            self.in_flight = False

        self.response = response
        return response

    # ==================== Import / Export ====================

    def import_content(self, content: str | bytes | None) -> ImportResult:
        """Import collections from a JSON payload."""
        if not content:
            logger.info("Import canceled or returned null")
            return ImportResult(success=False, cancelled=True)

        try:
            collections = parse_import_document(content)
        except ImportFailure as e:
            logger.warning(f"Import error: {e}")
            return ImportResult(success=False, message=str(e))

        count = self.store.import_collections(collections)
        return ImportResult(
            success=True,
            message=f"Collections imported successfully ({count} collections)",
            count=count,
        )

    def import_file(self, path: Path | str | None) -> ImportResult:
        """Import collections from a file. A missing path means cancelled."""
        try:
            content = read_import_file(path)
        except ImportFailure as e:
            logger.warning(f"Import error: {e}")
            return ImportResult(success=False, message=f"Import Error: {e}")
        return self.import_content(content)

    def export_collections(self, format: str = "internal") -> str:
        """Serialize all collections as pretty-printed JSON.

        ``format`` is ``internal`` (the importable array) or ``postman``.
        """
        if format == "postman":
            data: Any = export_postman(self.store.collections)
        elif format == "internal":
            data = self.store.export_collections()
        else:
            raise ValueError(f"Unknown export format: {format}")
        return json.dumps(data, indent=2, ensure_ascii=False)
