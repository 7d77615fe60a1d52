from fastapi import status
import logging

from schemas.user import LoginRequest, TokenResponse
from store.enums import Role
from store.repositories import UserRepository
from utils.auth import create_access_token, verify_password
from utils.response import success_response, error_response

logger = logging.getLogger(__name__)


async def login(request: LoginRequest, user_repo: UserRepository):
    """Authenticate by email and password and issue a bearer token."""
    user = user_repo.get_by_email(request.email)
    if not user or not verify_password(request.password, user.password_hash):
        logger.warning(f"Failed login attempt for {request.email}")
        return error_response(status_code=status.HTTP_401_UNAUTHORIZED, message="Invalid credentials")
    if not user.is_active:
        return error_response(status_code=status.HTTP_403_FORBIDDEN, message="Account is inactive")

    access_token = create_access_token(user)
    logger.info(f"User {user.id} logged in")
    return success_response(
        status_code=status.HTTP_200_OK,
        message="Login successful",
        data=TokenResponse(
            access_token=access_token,
            user_id=user.id,
            role=Role(user.role).value,
        ),
    )
