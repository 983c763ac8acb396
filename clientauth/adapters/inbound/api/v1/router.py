# clientauth/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from clientauth.adapters.inbound.api.v1.endpoints import client_authorization_endpoint

api_router = APIRouter()

# Include the endpoint routers
api_router.include_router(
    client_authorization_endpoint.router,
    prefix="/clientauthorizations",
    tags=["Client Authorizations"],
)
