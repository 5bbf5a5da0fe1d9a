"""Ghostwire Models Package - request, collection and response data structures."""

from ghostwire.models.collection import Collection
from ghostwire.models.request import (
    Auth,
    BasicAuth,
    BearerAuth,
    Header,
    HttpMethod,
    NoAuth,
    RequestModel,
    ScanType,
    auth_from_dict,
    display_name,
    generate_id,
)
from ghostwire.models.response import ParsedOutput, ResponseModel, body_size

__all__ = [
    # Request
    "Auth",
    "BasicAuth",
    "BearerAuth",
    "Header",
    "HttpMethod",
    "NoAuth",
    "RequestModel",
    "ScanType",
    "auth_from_dict",
    "display_name",
    "generate_id",
    # Collection
    "Collection",
    # Response
    "ParsedOutput",
    "ResponseModel",
    "body_size",
]
