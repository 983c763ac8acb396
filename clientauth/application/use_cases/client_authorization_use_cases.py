# clientauth/application/use_cases/client_authorization_use_cases.py

"""
Service for client authorization management.

This module implements the CRUD contract for client authorizations on top
of a registry. Identity derivation and validation run on the calling task;
storage writes run on background tasks whose single result is delivered
through a CompletionHandle.
"""

import asyncio
import copy
import logging
import uuid
from dataclasses import replace
from typing import Coroutine, List, Optional, Set, TypeVar

from clientauth.application.ports.inbound import IClientAuthorizationUseCase
from clientauth.application.ports.outbound import (
    IClientAuthorizationRegistry,
    IClientAuthorizationValidator,
)
from clientauth.domain.exceptions import (
    DomainException,
    InvalidException,
    InvalidRequestException,
)
from clientauth.domain.models.client_authorization_domain_model import (
    ClientAuthorization,
    ObjectMeta,
    Status,
)
from clientauth.domain.models.request_context import RequestContext
from clientauth.domain.services.identity_service import derive_name
from clientauth.domain.services.validation_service import ClientAuthorizationValidator
from clientauth.shared.utils.completion import CompletionHandle
from clientauth.shared.utils.selectors import Selector

T = TypeVar("T")

INITIAL_RESOURCE_VERSION = "1"

logger = logging.getLogger(__name__)


def fill_system_fields(ctx: RequestContext, meta: ObjectMeta, name: str) -> ObjectMeta:
    """
    Populate the system metadata of a resource being created.

    Everything is derived from the request context, so the same context and
    name always produce the same metadata. Caller-supplied labels are kept.
    """
    return ObjectMeta(
        namespace=ctx.namespace,
        uid=str(uuid.uuid5(uuid.NAMESPACE_URL, f"{ctx.request_id}/{ctx.namespace}/{name}")),
        creation_timestamp=ctx.request_time,
        resource_version=INITIAL_RESOURCE_VERSION,
        labels=dict(meta.labels),
    )


def inherit_system_fields(meta: ObjectMeta, old: ObjectMeta) -> ObjectMeta:
    """Carry forward the system fields an update request left unset."""
    return ObjectMeta(
        namespace=meta.namespace or old.namespace,
        uid=meta.uid or old.uid,
        creation_timestamp=meta.creation_timestamp or old.creation_timestamp,
        resource_version=meta.resource_version or old.resource_version,
        labels=dict(meta.labels),
    )


class AsyncClientAuthorizationService(IClientAuthorizationUseCase):
    """
    Gateway between the serving layer and the client authorization registry.

    The service holds no per-request state. It keeps a strong reference to
    every write still in flight so that an operation whose caller went away
    still runs to completion.
    """

    def __init__(
            self,
            registry: IClientAuthorizationRegistry,
            validator: Optional[IClientAuthorizationValidator] = None,
    ):
        self.registry = registry
        self.validator = validator or ClientAuthorizationValidator()
        self._pending: Set[asyncio.Task] = set()

    def new(self) -> ClientAuthorization:
        return ClientAuthorization()

    async def get(self, ctx: RequestContext, name: str) -> ClientAuthorization:
        return await self.registry.get(ctx, name)

    async def list(
            self,
            ctx: RequestContext,
            label_selector: Optional[Selector] = None,
            field_selector: Optional[Selector] = None,
    ) -> List[ClientAuthorization]:
        """
        List the authorizations whose labels match ``label_selector``.

        Field selectors are accepted but not evaluated: every entity matches.
        """
        if field_selector is not None and not field_selector.empty():
            logger.debug(f"Field selector '{field_selector}' ignored when listing client authorizations")
        return await self.registry.list(ctx, label_selector or Selector.everything())

    async def create(self, ctx: RequestContext, obj: object) -> CompletionHandle[ClientAuthorization]:
        """
        Register a new authorization.

        The name is always derived from user_name and client_name; any
        name supplied by the caller is overwritten.

        Raises:
            InvalidRequestException: If obj is not an authorization or lacks user/client
            InvalidException: If the authorization fails validation

        Returns:
            Handle resolving to the authorization as re-read from the registry
        """
        if not isinstance(obj, ClientAuthorization):
            raise InvalidRequestException(detail=f"Not a client authorization: {obj!r}")

        if not obj.user_name or not obj.client_name:
            raise InvalidRequestException(
                detail="Invalid client authorization: user_name and client_name are required"
            )

        name = derive_name(obj.user_name, obj.client_name)
        authorization = replace(
            obj,
            name=name,
            scopes=list(obj.scopes),
            metadata=fill_system_fields(ctx, obj.metadata, name),
        )

        errors = self.validator.validate_new(authorization)
        if errors:
            raise InvalidException(ClientAuthorization.kind, name, errors)

        return self._dispatch(f"create {name}", self._create(ctx, authorization))

    async def update(self, ctx: RequestContext, obj: object) -> CompletionHandle[ClientAuthorization]:
        """
        Modify an existing authorization.

        Raises:
            InvalidRequestException: If obj is not an authorization
            InvalidException: If the new version is invalid on its own or
                relative to the stored version
            ResourceNotFoundException: If no authorization has this name

        Returns:
            Handle resolving to the authorization as re-read from the registry
        """
        if not isinstance(obj, ClientAuthorization):
            raise InvalidRequestException(detail=f"Not a client authorization: {obj!r}")

        errors = self.validator.validate_new(obj)
        if errors:
            raise InvalidException(ClientAuthorization.kind, obj.name, errors)

        old = await self.registry.get(ctx, obj.name)
        authorization = replace(
            obj,
            scopes=list(obj.scopes),
            metadata=inherit_system_fields(obj.metadata, old.metadata),
        )

        errors = self.validator.validate_update(authorization, old)
        if errors:
            raise InvalidException(ClientAuthorization.kind, obj.name, errors)

        return self._dispatch(f"update {obj.name}", self._update(ctx, authorization))

    async def delete(self, ctx: RequestContext, name: str) -> CompletionHandle[Status]:
        """
        Delete an authorization by name.

        Existence is not checked here; a missing name surfaces the
        registry's ResourceNotFoundException through the handle.
        """
        return self._dispatch(f"delete {name}", self._delete(ctx, name))

    async def drain(self) -> None:
        """Wait for every write still in flight."""
        if self._pending:
            logger.info(f"Waiting for {len(self._pending)} pending client authorization writes")
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _create(self, ctx: RequestContext, authorization: ClientAuthorization) -> ClientAuthorization:
        await self.registry.create(ctx, copy.deepcopy(authorization))
        logger.info(f"Client authorization created: {authorization.name}")
        return await self.get(ctx, authorization.name)

    async def _update(self, ctx: RequestContext, authorization: ClientAuthorization) -> ClientAuthorization:
        await self.registry.update(ctx, copy.deepcopy(authorization))
        logger.info(f"Client authorization updated: {authorization.name}")
        return await self.get(ctx, authorization.name)

    async def _delete(self, ctx: RequestContext, name: str) -> Status:
        await self.registry.delete(ctx, name)
        logger.info(f"Client authorization deleted: {name}")
        return Status.success()

    def _dispatch(self, operation: str, coro: Coroutine[None, None, T]) -> CompletionHandle[T]:
        task = asyncio.create_task(coro)
        task.set_name(f"clientauthorization {operation}")
        self._pending.add(task)
        task.add_done_callback(self._finished)
        return CompletionHandle(task)

    def _finished(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning(f"{task.get_name()} was cancelled")
            return
        error = task.exception()
        if error is None:
            return
        # Callers awaiting the handle receive the same error
        if isinstance(error, DomainException):
            logger.info(f"{task.get_name()} failed: {error}")
        else:
            logger.error(f"{task.get_name()} failed unexpectedly: {error!r}")
