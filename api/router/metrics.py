"""
Metrics router - registers dashboard metrics endpoints.
"""
from fastapi import APIRouter

from api.controller.metrics import (
    owner_metrics_controller,
    tenant_metrics_controller,
    owners_metrics_controller,
)

metrics_router = APIRouter(prefix="/metrics", tags=["Metrics"])

metrics_router.add_api_route(
    "/owner",
    endpoint=owner_metrics_controller,
    methods=["GET"],
    response_model=dict,
    summary="Get dashboard metrics for an owner",
)

metrics_router.add_api_route(
    "/tenants/{tenant_id}",
    endpoint=tenant_metrics_controller,
    methods=["GET"],
    response_model=dict,
    summary="Get payment and lease metrics for a tenant",
)

metrics_router.add_api_route(
    "/owners",
    endpoint=owners_metrics_controller,
    methods=["GET"],
    response_model=dict,
    summary="Get condensed metrics for every owner (admin)",
)
