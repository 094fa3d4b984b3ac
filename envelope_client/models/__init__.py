"""Export Pydantic models for convenience."""

from .common import ErrorDetail, Meta, MultipartFile, coerce_status_code
from .envelope import ResponseEnvelope
from .result import Failure, Result, Success

__all__ = [
    "ErrorDetail",
    "Failure",
    "Meta",
    "MultipartFile",
    "ResponseEnvelope",
    "Result",
    "Success",
    "coerce_status_code",
]
