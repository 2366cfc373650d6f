"""REST runtime abstractions."""

from .coalescer import RequestCoalescer
from .http_client import AiohttpTransport
from .runner import ModelAdapter, ResponseAdapter, RestRunner
from .transport import Transport, TransportResponse

__all__ = [
    "AiohttpTransport",
    "Transport",
    "TransportResponse",
    "RequestCoalescer",
    "RestRunner",
    "ResponseAdapter",
    "ModelAdapter",
]
