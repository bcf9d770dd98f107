"""
FastAPI dependencies.

The store and the business notifier are created once by
``create_app`` and kept on ``app.state``; these helpers hand them, or
services built on them, to route handlers.
"""

from fastapi import Depends, Request

from .storage import Store
from ..services.admin_service import AdminService
from ..services.business_notifier import BusinessNotifier
from ..services.friend_service import FriendService
from ..services.leave_service import LeaveService
from ..services.transfer_service import TransferService
from ..services.user_service import UserService


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_notifier(request: Request) -> BusinessNotifier:
    return request.app.state.notifier


def get_user_service(store: Store = Depends(get_store)) -> UserService:
    return UserService(store)


def get_admin_service(store: Store = Depends(get_store)) -> AdminService:
    return AdminService(store)


def get_leave_service(store: Store = Depends(get_store)) -> LeaveService:
    return LeaveService(store)


def get_transfer_service(store: Store = Depends(get_store)) -> TransferService:
    return TransferService(store)


def get_friend_service(store: Store = Depends(get_store)) -> FriendService:
    return FriendService(store)
