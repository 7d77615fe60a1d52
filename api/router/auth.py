"""
Auth router - registers authentication endpoints.
"""
from fastapi import APIRouter

from api.controller.auth import login_controller

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])

auth_router.add_api_route(
    "/login",
    endpoint=login_controller,
    methods=["POST"],
    response_model=dict,
    summary="Log in with email and password",
)
