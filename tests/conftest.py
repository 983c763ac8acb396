import asyncio
import copy
from typing import Dict, List, Optional, Tuple

import pytest

from clientauth.application.ports.outbound import IClientAuthorizationRegistry
from clientauth.application.use_cases import AsyncClientAuthorizationService
from clientauth.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from clientauth.domain.models.client_authorization_domain_model import ClientAuthorization
from clientauth.domain.models.request_context import RequestContext
from clientauth.domain.services.validation_service import ClientAuthorizationValidator
from clientauth.shared.utils.selectors import Selector


class RecordingRegistry(IClientAuthorizationRegistry):
    """
    In-memory registry that records every call.

    ``errors`` maps an operation name to the exception it should raise.
    When ``gate`` is set, writes wait for it before touching the store.
    """

    def __init__(self):
        self.items: Dict[Tuple[str, str], ClientAuthorization] = {}
        self.calls: List[Tuple[str, str]] = []
        self.errors: Dict[str, Exception] = {}
        self.gate: Optional[asyncio.Event] = None

    def called(self, operation: str) -> bool:
        return any(call[0] == operation for call in self.calls)

    async def _enter(self, operation: str, name: str, write: bool = False) -> None:
        self.calls.append((operation, name))
        if write and self.gate is not None:
            await self.gate.wait()
        # Yield so concurrent operations interleave
        await asyncio.sleep(0)
        if operation in self.errors:
            raise self.errors[operation]

    async def get(self, ctx: RequestContext, name: str) -> ClientAuthorization:
        await self._enter("get", name)
        try:
            return copy.deepcopy(self.items[(ctx.namespace, name)])
        except KeyError:
            raise ResourceNotFoundException(detail="ClientAuthorization not found", resource_id=name)

    async def list(self, ctx: RequestContext, label_selector: Selector) -> List[ClientAuthorization]:
        await self._enter("list", str(label_selector))
        return [
            copy.deepcopy(item) for (namespace, _), item in self.items.items()
            if namespace == ctx.namespace and label_selector.matches(item.metadata.labels)
        ]

    async def create(self, ctx: RequestContext, authorization: ClientAuthorization) -> None:
        await self._enter("create", authorization.name, write=True)
        key = (ctx.namespace, authorization.name)
        if key in self.items:
            raise ResourceAlreadyExistsException(
                detail="ClientAuthorization already exists", resource_id=authorization.name
            )
        self.items[key] = copy.deepcopy(authorization)

    async def update(self, ctx: RequestContext, authorization: ClientAuthorization) -> None:
        await self._enter("update", authorization.name, write=True)
        key = (ctx.namespace, authorization.name)
        if key not in self.items:
            raise ResourceNotFoundException(
                detail="ClientAuthorization not found", resource_id=authorization.name
            )
        stored = self.items[key]
        stored.scopes = list(authorization.scopes)
        stored.metadata.labels = dict(authorization.metadata.labels)
        stored.metadata.resource_version = str(int(stored.metadata.resource_version) + 1)

    async def delete(self, ctx: RequestContext, name: str) -> None:
        await self._enter("delete", name, write=True)
        try:
            del self.items[(ctx.namespace, name)]
        except KeyError:
            raise ResourceNotFoundException(detail="ClientAuthorization not found", resource_id=name)


class RecordingValidator(ClientAuthorizationValidator):
    def __init__(self):
        self.calls: List[str] = []

    def validate_new(self, authorization):
        self.calls.append("validate_new")
        return super().validate_new(authorization)

    def validate_update(self, authorization, old):
        self.calls.append("validate_update")
        return super().validate_update(authorization, old)


@pytest.fixture
def registry() -> RecordingRegistry:
    return RecordingRegistry()


@pytest.fixture
def validator() -> RecordingValidator:
    return RecordingValidator()


@pytest.fixture
def service(registry, validator) -> AsyncClientAuthorizationService:
    return AsyncClientAuthorizationService(registry, validator)


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext(namespace="tenant-a", user="admin")
