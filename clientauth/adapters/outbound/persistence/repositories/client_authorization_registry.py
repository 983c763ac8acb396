# clientauth/adapters/outbound/persistence/repositories/client_authorization_registry.py

"""
Registry for client authorizations.

This module implements the IClientAuthorizationRegistry port on top of
SQLAlchemy. Authorizations are keyed by (namespace, name); the unique
constraint on those columns turns a second create for the same user and
client into ResourceAlreadyExistsException.
"""

from datetime import timezone
from typing import List

from sqlalchemy.ext.asyncio import async_sessionmaker

from clientauth.adapters.outbound.persistence.models import ClientAuthorizationModel
from clientauth.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from clientauth.application.ports.outbound import IClientAuthorizationRegistry
from clientauth.domain.exceptions import ResourceNotFoundException
from clientauth.domain.models.client_authorization_domain_model import (
    ClientAuthorization,
    ObjectMeta,
)
from clientauth.domain.models.request_context import RequestContext
from clientauth.shared.utils.selectors import Selector


class AsyncClientAuthorizationRegistry(AsyncCRUDBase[ClientAuthorizationModel], IClientAuthorizationRegistry):
    """
    Async implementation of the client authorization registry.

    Extends AsyncCRUDBase with the conversions between the ORM model
    and the ClientAuthorization domain model.
    """

    def __init__(self, session_factory: async_sessionmaker):
        super().__init__(ClientAuthorizationModel, session_factory)

    async def get(self, ctx: RequestContext, name: str) -> ClientAuthorization:
        """
        Find an authorization by name in the context namespace.

        Raises:
            ResourceNotFoundException: If the authorization doesn't exist
            StorageFaultException: In case of database error
        """
        async with self.session() as db:
            db_obj = await self.get_by_keys(db, namespace=ctx.namespace, name=name)
        if db_obj is None:
            raise ResourceNotFoundException(
                detail="ClientAuthorization not found",
                resource_id=name
            )
        return self.to_domain(db_obj)

    async def list(self, ctx: RequestContext, label_selector: Selector) -> List[ClientAuthorization]:
        async with self.session() as db:
            rows = await self.get_multi(db, namespace=ctx.namespace)
        # Labels are stored as JSON, so selectors are matched here
        return [
            authorization for authorization in map(self.to_domain, rows)
            if label_selector.matches(authorization.metadata.labels)
        ]

    async def create(self, ctx: RequestContext, authorization: ClientAuthorization) -> None:
        async with self.session() as db:
            await self.insert(db, self.to_model(ctx, authorization), resource_id=authorization.name)

    async def update(self, ctx: RequestContext, authorization: ClientAuthorization) -> None:
        """
        Replace the scopes and labels of a stored authorization.

        Identity and creation metadata are never rewritten. The resource
        version is bumped on every update.

        Raises:
            ResourceNotFoundException: If the authorization no longer exists
            StorageFaultException: In case of database error
        """
        async with self.session() as db:
            db_obj = await self.get_by_keys(db, namespace=ctx.namespace, name=authorization.name)
            if db_obj is None:
                raise ResourceNotFoundException(
                    detail="ClientAuthorization not found",
                    resource_id=authorization.name
                )
            await self.apply(db, db_obj, {
                "scopes": list(authorization.scopes),
                "labels": dict(authorization.metadata.labels),
                "resource_version": db_obj.resource_version + 1,
            })

    async def delete(self, ctx: RequestContext, name: str) -> None:
        async with self.session() as db:
            await self.remove(db, resource_id=name, namespace=ctx.namespace, name=name)

    def to_model(self, ctx: RequestContext, authorization: ClientAuthorization) -> ClientAuthorizationModel:
        """
        Convert a domain model to a new database row.

        Args:
            ctx: Request context supplying the namespace
            authorization: ClientAuthorization domain model

        Returns:
            Unsaved ORM model
        """
        meta = authorization.metadata
        return ClientAuthorizationModel(
            namespace=ctx.namespace,
            name=authorization.name,
            user_name=authorization.user_name,
            client_name=authorization.client_name,
            scopes=list(authorization.scopes),
            labels=dict(meta.labels),
            uid=meta.uid,
            creation_timestamp=meta.creation_timestamp,
            resource_version=int(meta.resource_version or 1),
        )

    def to_domain(self, db_model: ClientAuthorizationModel) -> ClientAuthorization:
        """
        Convert database model to domain model.

        Args:
            db_model: ClientAuthorization ORM model

        Returns:
            Domain model of the client authorization
        """
        created = db_model.creation_timestamp
        # SQLite drops the offset of stored datetimes
        if created is not None and created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return ClientAuthorization(
            name=db_model.name,
            user_name=db_model.user_name,
            client_name=db_model.client_name,
            scopes=list(db_model.scopes or []),
            metadata=ObjectMeta(
                namespace=db_model.namespace,
                uid=db_model.uid,
                creation_timestamp=created,
                resource_version=str(db_model.resource_version),
                labels=dict(db_model.labels or {}),
            ),
        )
