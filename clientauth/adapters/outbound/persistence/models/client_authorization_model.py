# clientauth/adapters/outbound/persistence/models/client_authorization_model.py

"""
Client authorization model.

This module defines the table holding the authorizations granted by users
to client applications.
"""

from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from clientauth.adapters.outbound.persistence.database import Base
from clientauth.domain.services.identity_service import MAX_NAME_LENGTH


class ClientAuthorizationModel(Base):
    """
    Model representing an authorization of a client by a user.

    Attributes:
        id: Surrogate primary key
        namespace: Scope the name is unique in
        name: Derived name, unique per namespace
        user_name: Identity of the granting user
        client_name: Identity of the authorized client
        scopes: Ordered list of granted scopes
        labels: Free-form string labels used by selectors
        uid: System-assigned unique identifier
        creation_timestamp: Time the authorization was created
        resource_version: Incremented on every update
        updated_at: Date and time of the last update
    """
    __tablename__ = "client_authorizations"
    __table_args__ = (
        UniqueConstraint("namespace", "name", name="uq_client_authorizations_namespace_name"),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    namespace = Column(String(253), nullable=False, default="", index=True)
    name = Column(String(MAX_NAME_LENGTH), nullable=False, index=True)
    user_name = Column(String(253), nullable=False, index=True)
    client_name = Column(String(253), nullable=False, index=True)
    scopes = Column(JSON, nullable=False, default=list)
    labels = Column(JSON, nullable=False, default=dict)
    uid = Column(String(36), nullable=False, unique=True)
    creation_timestamp = Column(DateTime(timezone=True), nullable=False)
    resource_version = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self) -> str:
        """String representation of the ClientAuthorizationModel object."""
        return f"<ClientAuthorization(namespace={self.namespace!r}, name={self.name!r})>"
