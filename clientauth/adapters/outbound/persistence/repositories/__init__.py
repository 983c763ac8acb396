# clientauth/adapters/outbound/persistence/repositories/__init__.py

"""
Repository implementations.

This package contains the SQLAlchemy implementations of the outbound
persistence ports.
"""

from clientauth.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from clientauth.adapters.outbound.persistence.repositories.client_authorization_registry import (
    AsyncClientAuthorizationRegistry,
)

__all__ = [
    "AsyncCRUDBase",
    "AsyncClientAuthorizationRegistry",
]
