"""HTTP helpers for k8scan."""

from .client import HTTPClient, HTTPResponse, ResponseBodyError

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "ResponseBodyError",
]
