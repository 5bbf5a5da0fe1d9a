"""Ghostwire Converters - Postman import/export and import parsing."""

from ghostwire.converters.importer import (
    ImportFailure,
    ImportFormatError,
    ImportParseError,
    ImportReadError,
    parse_import_document,
    read_import_file,
)
from ghostwire.converters.postman import (
    DEFAULT_COLLECTION_NAME,
    build_variable_table,
    convert_postman_to_internal,
    export_postman,
    is_postman_collection,
    iter_postman_items,
    resolve_variables,
)

__all__ = [
    "ImportFailure",
    "ImportFormatError",
    "ImportParseError",
    "ImportReadError",
    "parse_import_document",
    "read_import_file",
    "DEFAULT_COLLECTION_NAME",
    "build_variable_table",
    "convert_postman_to_internal",
    "export_postman",
    "is_postman_collection",
    "iter_postman_items",
    "resolve_variables",
]
