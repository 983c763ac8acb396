# clientauth/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import List, Optional

from clientauth.domain.models.client_authorization_domain_model import ClientAuthorization, Status
from clientauth.domain.models.request_context import RequestContext
from clientauth.shared.utils.completion import CompletionHandle
from clientauth.shared.utils.selectors import Selector


class IClientAuthorizationUseCase(ABC):
    """
    Interface for client authorization use cases.

    Reads return their result directly. Writes validate on the calling task
    and return a handle that delivers the single eventual storage result.
    """

    @abstractmethod
    def new(self) -> ClientAuthorization:
        """Return an empty authorization for use with create and update."""
        pass

    @abstractmethod
    async def get(self, ctx: RequestContext, name: str) -> ClientAuthorization:
        """Get an authorization by name."""
        pass

    @abstractmethod
    async def list(
            self,
            ctx: RequestContext,
            label_selector: Optional[Selector] = None,
            field_selector: Optional[Selector] = None,
    ) -> List[ClientAuthorization]:
        """List authorizations matching the label selector."""
        pass

    @abstractmethod
    async def create(self, ctx: RequestContext, obj: object) -> CompletionHandle[ClientAuthorization]:
        """Register a new authorization."""
        pass

    @abstractmethod
    async def update(self, ctx: RequestContext, obj: object) -> CompletionHandle[ClientAuthorization]:
        """Modify an existing authorization."""
        pass

    @abstractmethod
    async def delete(self, ctx: RequestContext, name: str) -> CompletionHandle[Status]:
        """Delete an authorization by name."""
        pass
