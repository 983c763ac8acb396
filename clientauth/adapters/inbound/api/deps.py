# clientauth/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for the request context, the registry, the validator
and the client authorization service.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Header, Query

from clientauth.adapters.configuration.config import settings
from clientauth.adapters.outbound.persistence.database import AsyncSessionLocal
from clientauth.adapters.outbound.persistence.repositories import AsyncClientAuthorizationRegistry
from clientauth.application.ports.outbound import (
    IClientAuthorizationRegistry,
    IClientAuthorizationValidator,
)
from clientauth.application.use_cases import AsyncClientAuthorizationService
from clientauth.domain.exceptions import InvalidRequestException
from clientauth.domain.models.request_context import RequestContext
from clientauth.domain.services.validation_service import ClientAuthorizationValidator
from clientauth.shared.utils.selectors import Selector

# Configure logger
logger = logging.getLogger(__name__)


########################################################################
# Request Context
########################################################################

def get_request_context(
        namespace: Optional[str] = Query(None, description="Namespace scoping the request"),
        x_request_id: Optional[str] = Header(None),
        x_remote_user: Optional[str] = Header(None),
) -> RequestContext:
    """
    Build the request context handed to the service.

    Caller authentication happens upstream; the remote user header is
    carried through as-is.
    """
    options = {
        "namespace": settings.DEFAULT_NAMESPACE if namespace is None else namespace,
        "user": x_remote_user,
    }
    if x_request_id:
        options["request_id"] = x_request_id
    return RequestContext(**options)


def parse_selector(value: Optional[str], parameter: str) -> Selector:
    try:
        return Selector.parse(value)
    except ValueError as e:
        logger.warning(f"Invalid {parameter}: {value!r}")
        raise InvalidRequestException(detail=f"Invalid {parameter}: {e}")


########################################################################
# Service wiring
########################################################################

@lru_cache()
def get_registry() -> IClientAuthorizationRegistry:
    return AsyncClientAuthorizationRegistry(AsyncSessionLocal)


@lru_cache()
def get_validator() -> IClientAuthorizationValidator:
    return ClientAuthorizationValidator()


@lru_cache()
def get_client_authorization_service() -> AsyncClientAuthorizationService:
    """
    Process-wide service instance.

    A single instance owns every pending write, so writes whose request
    went away are still tracked and drained on shutdown.
    """
    return AsyncClientAuthorizationService(get_registry(), get_validator())
