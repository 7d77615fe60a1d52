"""
Metrics controller - owner dashboard, tenant detail and the admin owner overview.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database.postgres import get_db
from service.owner_metrics import get_owner_metrics, get_owners_metrics
from service.tenant_metrics import get_tenant_metrics
from store.enums import Role
from store.repositories import TenantRepository, UserRepository
from utils.auth import get_current_user, require_role
from utils.response import success_response


async def owner_metrics_controller(
    owner_id: Optional[int] = Query(None, description="Owner to inspect (admin only)"),
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Dashboard metrics for the calling owner, or any owner when called by an admin."""
    role = current_user["role"]
    if role == Role.OWNER.value:
        if owner_id is not None and owner_id != current_user["user_id"]:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        owner_id = current_user["user_id"]
    elif role == Role.ADMIN.value:
        owner_id = owner_id or current_user["user_id"]
    else:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")

    owner = UserRepository(db).get_by_id(owner_id)
    if not owner:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Owner not found")

    return success_response(
        status_code=200,
        message="Owner metrics retrieved successfully",
        data=await get_owner_metrics(db, owner),
    )


async def tenant_metrics_controller(
    tenant_id: int,
    current_user: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Metrics for one tenant; visible to its owner, its own user account, and admins."""
    tenant = TenantRepository(db).get_by_id(tenant_id)
    if not tenant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    user_id = current_user["user_id"]
    allowed = (
        current_user["role"] == Role.ADMIN.value
        or tenant.owner_id == user_id
        or tenant.user_id == user_id
    )
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")

    return success_response(
        status_code=200,
        message="Tenant metrics retrieved successfully",
        data=await get_tenant_metrics(db, tenant),
    )


async def owners_metrics_controller(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: dict = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    owners = UserRepository(db).get_by_role(Role.OWNER, skip=skip, limit=limit)
    return success_response(
        status_code=200,
        message="Owner metrics retrieved successfully",
        data={"owners": await get_owners_metrics(db, owners), "count": len(owners)},
    )
