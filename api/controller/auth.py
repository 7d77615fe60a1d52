"""
Auth controller - exposes the login endpoint.
"""
from fastapi import Depends

from schemas.user import LoginRequest
from service.user import login
from store.repositories import UserRepository
from utils.dependencies import get_repository


async def login_controller(
    request: LoginRequest,
    user_repo: UserRepository = Depends(get_repository(UserRepository)),
):
    """Exchange email and password for an access token."""
    return await login(request, user_repo)
