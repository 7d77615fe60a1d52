"""
Notifications router - registers inbox and sweep endpoints.
"""
from fastapi import APIRouter

from api.controller.notifications import (
    get_notifications_controller,
    get_unread_count_controller,
    mark_notification_controller,
    mark_all_read_controller,
    run_checks_controller,
)

notifications_router = APIRouter(prefix="/notifications", tags=["Notifications"])

notifications_router.add_api_route(
    "",
    endpoint=get_notifications_controller,
    methods=["GET"],
    response_model=dict,
    summary="List the current user's notifications",
)

notifications_router.add_api_route(
    "/unread-count",
    endpoint=get_unread_count_controller,
    methods=["GET"],
    response_model=dict,
    summary="Count unread notifications",
)

notifications_router.add_api_route(
    "/{notification_id}/read",
    endpoint=mark_notification_controller,
    methods=["PATCH"],
    response_model=dict,
    summary="Mark a notification as read or unread",
)

notifications_router.add_api_route(
    "/read-all",
    endpoint=mark_all_read_controller,
    methods=["POST"],
    response_model=dict,
    summary="Mark every notification as read",
)

notifications_router.add_api_route(
    "/check",
    endpoint=run_checks_controller,
    methods=["POST"],
    response_model=dict,
    summary="Run overdue payment and lease expiration checks (admin)",
)
