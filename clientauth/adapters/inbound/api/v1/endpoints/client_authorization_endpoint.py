# clientauth/adapters/inbound/api/v1/endpoints/client_authorization_endpoint.py

"""
Endpoints for client authorizations.

Thin HTTP binding of the client authorization service: every route
builds a request context, calls one service operation and, for writes,
awaits the returned completion handle before responding.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from clientauth.adapters.inbound.api.deps import (
    get_client_authorization_service,
    get_request_context,
    parse_selector,
)
from clientauth.application.dtos.client_authorization_dto import (
    ClientAuthorizationCreate,
    ClientAuthorizationListOutput,
    ClientAuthorizationOutput,
    ClientAuthorizationUpdate,
    StatusOutput,
)
from clientauth.application.ports.inbound import IClientAuthorizationUseCase
from clientauth.domain.models.request_context import RequestContext

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=ClientAuthorizationListOutput,
    summary="List Client Authorizations",
    description="Returns every client authorization of the namespace matching the label selector. "
                "The field selector is accepted but not applied.",
)
async def list_client_authorizations(
        label_selector: Optional[str] = Query(None, alias="labelSelector"),
        field_selector: Optional[str] = Query(None, alias="fieldSelector"),
        ctx: RequestContext = Depends(get_request_context),
        service: IClientAuthorizationUseCase = Depends(get_client_authorization_service),
):
    items = await service.list(
        ctx,
        parse_selector(label_selector, "labelSelector"),
        parse_selector(field_selector, "fieldSelector"),
    )
    return ClientAuthorizationListOutput(
        items=[ClientAuthorizationOutput.from_domain(item) for item in items]
    )


@router.get(
    "/{name:path}",
    response_model=ClientAuthorizationOutput,
    summary="Get Client Authorization",
)
async def get_client_authorization(
        name: str = Path(..., description="Derived name, e.g. alice:cli-1"),
        ctx: RequestContext = Depends(get_request_context),
        service: IClientAuthorizationUseCase = Depends(get_client_authorization_service),
):
    return ClientAuthorizationOutput.from_domain(await service.get(ctx, name))


@router.post(
    "",
    response_model=ClientAuthorizationOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client Authorization",
    description="Creates the authorization of a client by a user. The name is derived "
                "from user_name and client_name.",
)
async def create_client_authorization(
        payload: ClientAuthorizationCreate,
        ctx: RequestContext = Depends(get_request_context),
        service: IClientAuthorizationUseCase = Depends(get_client_authorization_service),
):
    handle = await service.create(ctx, payload.to_domain())
    return ClientAuthorizationOutput.from_domain(await handle)


@router.put(
    "/{name:path}",
    response_model=ClientAuthorizationOutput,
    summary="Update Client Authorization",
    description="Replaces the scopes and labels of an authorization. "
                "user_name and client_name cannot change.",
)
async def update_client_authorization(
        payload: ClientAuthorizationUpdate,
        name: str = Path(...),
        ctx: RequestContext = Depends(get_request_context),
        service: IClientAuthorizationUseCase = Depends(get_client_authorization_service),
):
    handle = await service.update(ctx, payload.to_domain(name))
    return ClientAuthorizationOutput.from_domain(await handle)


@router.delete(
    "/{name:path}",
    response_model=StatusOutput,
    summary="Delete Client Authorization",
)
async def delete_client_authorization(
        name: str = Path(...),
        ctx: RequestContext = Depends(get_request_context),
        service: IClientAuthorizationUseCase = Depends(get_client_authorization_service),
):
    handle = await service.delete(ctx, name)
    result = await handle
    return StatusOutput(status=result.status, message=result.message)
