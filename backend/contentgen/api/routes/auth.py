from typing import Any

from fastapi import APIRouter, Response

from contentgen.api.deps import CurrentUser, OptionalUser
from contentgen.core.config import settings
from contentgen.models import Acknowledgement, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserPublic | None)
def read_me(current_user: OptionalUser) -> Any:
    """
    Current identity, or null when the request carries no valid session.
    """
    return current_user


@router.post("/logout", response_model=Acknowledgement)
def logout(response: Response, current_user: CurrentUser) -> Any:
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        path="/",
        secure=settings.ENVIRONMENT != "local",
        httponly=True,
        samesite="lax",
    )
    return Acknowledgement(success=True)
