# clientauth/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import List

from clientauth.domain.models.client_authorization_domain_model import ClientAuthorization
from clientauth.domain.models.field_error import FieldError
from clientauth.domain.models.request_context import RequestContext
from clientauth.shared.utils.selectors import Selector


class IClientAuthorizationRegistry(ABC):
    """
    Keyed store for client authorizations.

    Entities are addressed by ``(ctx.namespace, name)``. Failures are raised
    as domain exceptions: ResourceNotFoundException, ResourceAlreadyExistsException
    or StorageFaultException.
    """

    @abstractmethod
    async def get(self, ctx: RequestContext, name: str) -> ClientAuthorization:
        """Get an authorization by name; raises ResourceNotFoundException when absent."""
        pass

    @abstractmethod
    async def list(self, ctx: RequestContext, label_selector: Selector) -> List[ClientAuthorization]:
        """List authorizations whose labels match the selector."""
        pass

    @abstractmethod
    async def create(self, ctx: RequestContext, authorization: ClientAuthorization) -> None:
        """Persist a new authorization; raises ResourceAlreadyExistsException on a duplicate name."""
        pass

    @abstractmethod
    async def update(self, ctx: RequestContext, authorization: ClientAuthorization) -> None:
        """Replace a stored authorization; raises ResourceNotFoundException if it is gone."""
        pass

    @abstractmethod
    async def delete(self, ctx: RequestContext, name: str) -> None:
        """Delete an authorization by name; raises ResourceNotFoundException when absent."""
        pass


class IClientAuthorizationValidator(ABC):
    """Field-level rules applied before an authorization is submitted to the registry."""

    @abstractmethod
    def validate_new(self, authorization: ClientAuthorization) -> List[FieldError]:
        """Structural validity of a record. An empty list means valid."""
        pass

    @abstractmethod
    def validate_update(self, authorization: ClientAuthorization,
                        old: ClientAuthorization) -> List[FieldError]:
        """Validity of a proposed update relative to the stored version."""
        pass
