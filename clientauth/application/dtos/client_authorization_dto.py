# clientauth/application/dtos/client_authorization_dto.py

"""
Schemas for client authorization data.

This module defines the Pydantic dtos used to validate and serialize
client authorizations at the HTTP edge, and their conversion to and from
the domain model.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from clientauth.application.dtos.base_dto import CustomBaseModel
from clientauth.domain.models.client_authorization_domain_model import (
    ClientAuthorization,
    ObjectMeta,
)


class ClientAuthorizationBase(CustomBaseModel):
    """
    Base schema for client authorization data.

    Contains the attributes common to every client authorization dto.
    """
    user_name: str = Field(..., description="Identity of the granting user")
    client_name: str = Field(..., description="Identity of the authorized client application")
    scopes: List[str] = Field(default_factory=list, description="Granted scopes, in order")
    labels: Dict[str, str] = Field(default_factory=dict, description="Labels used by list selectors")


class ClientAuthorizationCreate(ClientAuthorizationBase):
    """
    Schema for creating a client authorization.

    The name is derived from user_name and client_name; a supplied name
    is ignored.
    """
    name: Optional[str] = Field(None, description="Ignored, the name is derived")

    def to_domain(self) -> ClientAuthorization:
        return ClientAuthorization(
            name=self.name or "",
            user_name=self.user_name,
            client_name=self.client_name,
            scopes=list(self.scopes),
            metadata=ObjectMeta(labels=dict(self.labels)),
        )


class ClientAuthorizationUpdate(ClientAuthorizationBase):
    """
    Schema for replacing a client authorization.

    user_name and client_name must match the stored version.
    Updates are not checked against a resource version: the last write wins.
    """

    def to_domain(self, name: str) -> ClientAuthorization:
        return ClientAuthorization(
            name=name,
            user_name=self.user_name,
            client_name=self.client_name,
            scopes=list(self.scopes),
            metadata=ObjectMeta(labels=dict(self.labels)),
        )


class ObjectMetaOutput(CustomBaseModel):
    namespace: str
    uid: Optional[str] = None
    creation_timestamp: Optional[datetime] = None
    resource_version: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)


class ClientAuthorizationOutput(CustomBaseModel):
    """
    Schema returned for a client authorization.
    """
    kind: str = ClientAuthorization.kind
    name: str
    user_name: str
    client_name: str
    scopes: List[str]
    metadata: ObjectMetaOutput

    @classmethod
    def from_domain(cls, authorization: ClientAuthorization) -> "ClientAuthorizationOutput":
        return cls.model_validate(authorization)


class ClientAuthorizationListOutput(CustomBaseModel):
    kind: str = f"{ClientAuthorization.kind}List"
    items: List[ClientAuthorizationOutput]


class StatusOutput(CustomBaseModel):
    status: str
    message: str = ""
