"""Response and result models."""

from .response import ApiV2Response
from .results import BulkResult, PartialResult

__all__ = [
    "ApiV2Response",
    "BulkResult",
    "PartialResult",
]
