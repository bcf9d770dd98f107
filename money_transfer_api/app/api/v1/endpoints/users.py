"""
User endpoints: registration, login, search and self-service updates.

Session tokens travel in the JSON body or the query string, never in
a header, because that is what the web client sends.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from money_transfer_api.app.core.deps import get_notifier, get_user_service
from money_transfer_api.app.schemas.user import (
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    SettingsUpdate,
    UserRead,
)
from money_transfer_api.app.services.business_notifier import BusinessNotifier
from money_transfer_api.app.services.user_service import BUSINESS, UserService

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    background_tasks: BackgroundTasks,
    service: UserService = Depends(get_user_service),
    notifier: BusinessNotifier = Depends(get_notifier),
) -> dict:
    """Register a new individual or business account.

    Business registrations are also forwarded to the partner service
    once the response is on its way; that call cannot fail the request.
    """
    user = await service.register(payload)
    if user["userType"] == BUSINESS:
        background_tasks.add_task(notifier.notify_registration, user)
    return user


@router.post("/login", response_model=UserRead)
async def login(payload: LoginRequest, service: UserService = Depends(get_user_service)) -> dict:
    """Check email and password and return the user with its session token."""
    return await service.login(payload)


@router.get("/search-user", response_model=Optional[UserRead])
async def search_user(
    q: Optional[str] = Query(None, description="Exact email, or part of a name or surname"),
    token: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
) -> Optional[dict]:
    return await service.search(q, token)


@router.post("/update-settings", response_model=UserRead)
async def update_settings(payload: SettingsUpdate, service: UserService = Depends(get_user_service)) -> dict:
    """Change payment preferences.  Fields absent from the body keep their value."""
    return await service.update_settings(payload)


@router.post("/update-profile", response_model=UserRead)
async def update_profile(payload: ProfileUpdate, service: UserService = Depends(get_user_service)) -> dict:
    """Change profile fields.

    Individuals may change ``surname`` but not the business fields;
    business accounts the reverse.  ``name`` and ``profilePic`` apply
    to both.
    """
    return await service.update_profile(payload)
