# clientauth/domain/exceptions.py

"""
Domain exceptions for the application.

These exceptions are pure (no HTTP knowledge). Each carries an
``internal_code`` that the inbound adapters map to a transport status, and
structured ``details`` so the outer layer can render a precise error without
re-deriving context.
"""

from dataclasses import asdict
from typing import Any, List, Optional

from clientauth.domain.models.field_error import FieldError


class DomainException(Exception):
    """Base exception for every error raised by the domain and its ports."""

    def __init__(
            self,
            detail: str,
            internal_code: str,
            details: Optional[Any] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.internal_code = internal_code
        self.details = details if details is not None else {}


class InvalidRequestException(DomainException):
    """The request is malformed (wrong kind, missing identity fields)."""

    def __init__(self, detail: str = "Invalid request", resource_id: Any = None):
        super().__init__(
            detail=detail,
            internal_code="INVALID_REQUEST",
            details={"name": resource_id} if resource_id is not None else {},
        )


class InvalidException(DomainException):
    """Field-level validation failed."""

    def __init__(self, kind: str, name: str, errors: List[FieldError]):
        self.kind = kind
        self.name = name
        self.errors = list(errors)
        summary = "; ".join(str(error) for error in self.errors)
        super().__init__(
            detail=f"{kind} \"{name}\" is invalid: {summary}",
            internal_code="INVALID",
            details={
                "kind": kind,
                "name": name,
                "causes": [asdict(error) for error in self.errors],
            },
        )


class ResourceNotFoundException(DomainException):
    """Resource not found."""

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        self.resource_id = resource_id
        super().__init__(
            detail=f"{detail}{resource_info}",
            internal_code="RESOURCE_NOT_FOUND",
            details={"name": resource_id} if resource_id is not None else {},
        )


class ResourceAlreadyExistsException(DomainException):
    """Resource already exists."""

    def __init__(self, detail: str = "Resource already exists", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        self.resource_id = resource_id
        super().__init__(
            detail=f"{detail}{resource_info}",
            internal_code="RESOURCE_ALREADY_EXISTS",
            details={"name": resource_id} if resource_id is not None else {},
        )


class StorageFaultException(DomainException):
    """Opaque failure of the underlying store."""

    def __init__(self, detail: str = "Error executing storage operation",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        self.original_error = original_error
        super().__init__(
            detail=f"{detail}{error_info}",
            internal_code="STORAGE_FAULT",
        )

