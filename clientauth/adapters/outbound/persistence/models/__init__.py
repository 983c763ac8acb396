# clientauth/adapters/outbound/persistence/models/__init__.py

"""
Data model module.

This module exports every SQLAlchemy model of the system.
"""

from clientauth.adapters.outbound.persistence.database import Base
from clientauth.adapters.outbound.persistence.models.client_authorization_model import ClientAuthorizationModel

__all__ = [
    "Base",
    "ClientAuthorizationModel",
]
