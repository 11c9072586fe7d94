"""Core exception hierarchy for leadscope."""

from typing import Any


class LeadscopeError(Exception):
    """Base exception for leadscope."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: Human readable message
            error_code: Stable machine readable code
            details: Extra context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ProviderError(LeadscopeError):
    """Failure raised by a source adapter or retrieval tier."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = "PROVIDER_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.provider_name = provider_name


class TransportError(ProviderError):
    """Network or HTTP level failure."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, provider_name, "NETWORK_ERROR", super_details)
        self.status_code = status_code


class MalformedPayloadError(ProviderError):
    """Upstream answered but the body does not have the expected shape."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, provider_name, "MALFORMED_PAYLOAD", details)


class TotalSourceFailure(ProviderError):
    """Every tier of one logical source failed.

    Recorded on the orchestrator result for reporting; never raised to the
    resolution coordinator.
    """

    def __init__(
        self,
        message: str,
        provider_name: str,
        failed_tiers: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if failed_tiers:
            super_details["failed_tiers"] = failed_tiers
        super().__init__(message, provider_name, "ALL_TIERS_FAILED", super_details)


class MalformedRecordError(LeadscopeError):
    """A single raw record could not be normalized."""

    def __init__(
        self,
        message: str,
        source_system: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["source_system"] = source_system
        super_details["reason"] = reason
        super().__init__(message, "MALFORMED_RECORD", super_details)
        self.source_system = source_system
        self.reason = reason


class OverrideStoreError(LeadscopeError):
    """Base class for override persistence failures."""

    def __init__(
        self,
        message: str,
        backend: str,
        error_code: str = "OVERRIDE_STORE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["backend"] = backend
        super().__init__(message, error_code, super_details)
        self.backend = backend


class OverrideReadError(OverrideStoreError):
    """Reading the override mapping failed."""

    def __init__(self, message: str, backend: str, details: dict[str, Any] | None = None):
        super().__init__(message, backend, "OVERRIDE_READ_ERROR", details)


class OverrideWriteError(OverrideStoreError):
    """Persisting an override failed."""

    def __init__(self, message: str, backend: str, details: dict[str, Any] | None = None):
        super().__init__(message, backend, "OVERRIDE_WRITE_ERROR", details)


class ResolutionError(LeadscopeError):
    """The resolution run failed as a whole."""

    def __init__(
        self,
        message: str = "Failed to load institutions",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "RESOLUTION_FAILED", details)


class DataValidationError(LeadscopeError):
    """Invalid caller input (criteria, override fields, filters)."""

    def __init__(
        self,
        message: str,
        validation_errors: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if validation_errors:
            super_details["validation_errors"] = validation_errors
        super().__init__(message, "VALIDATION_ERROR", super_details)
        self.validation_errors = validation_errors or {}


class LeadNotFoundError(LeadscopeError):
    """No lead with the requested id is loaded."""

    def __init__(self, lead_id: str, details: dict[str, Any] | None = None):
        super_details = details or {}
        super_details["lead_id"] = lead_id
        super().__init__(f"Lead '{lead_id}' not found", "LEAD_NOT_FOUND", super_details)
        self.lead_id = lead_id
