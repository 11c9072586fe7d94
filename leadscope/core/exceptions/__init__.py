"""Exception handling module."""

from leadscope.core.exceptions.base import (
    DataValidationError,
    LeadNotFoundError,
    LeadscopeError,
    MalformedPayloadError,
    MalformedRecordError,
    OverrideReadError,
    OverrideStoreError,
    OverrideWriteError,
    ProviderError,
    ResolutionError,
    TotalSourceFailure,
    TransportError,
)

__all__ = [
    "LeadscopeError",
    "ProviderError",
    "TransportError",
    "MalformedPayloadError",
    "TotalSourceFailure",
    "MalformedRecordError",
    "OverrideStoreError",
    "OverrideReadError",
    "OverrideWriteError",
    "ResolutionError",
    "DataValidationError",
    "LeadNotFoundError",
]
