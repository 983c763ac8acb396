# clientauth/application/use_cases/__init__.py

"""
Application service module.

This package contains the application services that implement the
client authorization CRUD contract.
"""

from clientauth.application.use_cases.client_authorization_use_cases import (
    AsyncClientAuthorizationService,
    fill_system_fields,
    inherit_system_fields,
)

__all__ = [
    "AsyncClientAuthorizationService",
    "fill_system_fields",
    "inherit_system_fields",
]
