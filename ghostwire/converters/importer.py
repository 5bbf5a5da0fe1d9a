"""Import document handling.

Reads, decodes and normalizes an import payload into internal
collections. Failures are raised as ``ImportFailure`` subclasses; the
workbench turns them into user-facing messages.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ghostwire.converters.postman import convert_postman_to_internal
from ghostwire.models import Collection

logger = logging.getLogger(__name__)


class ImportFailure(Exception):
    """Base class for import problems shown to the user."""


class ImportReadError(ImportFailure):
    """The import file could not be read."""


class ImportParseError(ImportFailure):
    """The import payload is not valid JSON."""


class ImportFormatError(ImportFailure):
    """The payload is neither an internal export nor a Postman collection."""


def read_import_file(path: Path | str | None) -> str | None:
    """Read an import file as UTF-8 text.

    Returns None when no file was chosen (cancellation). Raises
    ImportReadError when the file cannot be read.
    """
    if path is None or path == "":
        return None
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ImportReadError(f"Failed to read file: {e}") from e
    logger.info(f"Read import file {path} ({len(content)} chars)")
    return content


def _coerce_collections(data: Any) -> list[Collection]:
    if not isinstance(data, list):
        raise ImportFormatError(
            "Invalid format: Expected a list of collections or a Postman collection."
        )

    collections: list[Collection] = []
    for entry in data:
        if isinstance(entry, Collection):
            collections.append(entry)
        elif isinstance(entry, dict):
            collections.append(Collection.from_dict(entry))
        else:
            raise ImportFormatError(
                "Invalid format: every collection must be a JSON object."
            )
    return collections


def parse_import_document(content: str | bytes) -> list[Collection]:
    """Decode an import payload into collections.

    Raises:
        ImportParseError: the payload is not JSON or is nested too deeply
        ImportFormatError: the JSON has an unsupported shape
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise ImportParseError(f"Failed to import collections: {e}") from e

    try:
        converted = convert_postman_to_internal(data)
    except RecursionError as e:
        raise ImportParseError(f"Failed to import collections: {e}") from e
    return _coerce_collections(converted)
