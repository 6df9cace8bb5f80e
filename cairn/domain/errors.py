"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for the reconciliation contract
- The domain only raises; presentation layers decide how to report
- A missing remote resource is not an error: find() returns None

Taxonomy:
- ValidationError: illegal change set or lifecycle violation, recoverable by
  fixing the desired descriptor and starting a fresh pass
- TransportError: any failure reported by the cloud gateway, never retried here
- ManifestError: the desired-state manifest could not be read
"""

from typing import Any, Optional


class CairnError(Exception):
    """Base error for cairn."""


class ValidationError(CairnError):
    """A proposed change set is not legal."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        # Set by Reconciler.run() to the REJECTED pass before re-raising.
        self.reconciliation_pass: Optional[Any] = None


class RequiredFieldError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Field is required: {field}", field=field)


class CannotChangeFieldError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Field cannot be changed: {field}", field=field)


class ResourceNotFoundError(ValidationError):
    """A resource that must already exist was not found."""

    def __init__(self, kind: str, name: Optional[str], reason: str = "") -> None:
        message = f"{kind} {name!r} was not found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.kind = kind
        self.name = name


class TransportError(CairnError):
    """Failure reported by the cloud gateway (auth, network, bad response)."""

    def __init__(
        self,
        message: str,
        operation: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code


class ManifestError(CairnError):
    """Desired-state manifest is missing or malformed."""
