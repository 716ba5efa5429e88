import logging
import uuid
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request, Response
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from ignitia.core import security
from ignitia.core.config import settings
from ignitia.core.db import engine
from ignitia.core.errors import Unauthorized
from ignitia.models import TokenPayload, User

logger = logging.getLogger(__name__)

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False
)

REFRESHED_TOKEN_STATE = "refreshed_session_token"


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str | None, Depends(reusable_oauth2)]


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def get_current_user(request: Request, session: SessionDep, token: TokenDep) -> User:
    token = token or request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise Unauthorized()
    claims = security.decode_access_token(token)
    if claims is None:
        raise Unauthorized(details="Could not validate credentials")
    token_data = TokenPayload(**claims)
    try:
        user_id = uuid.UUID(token_data.sub or "")
    except ValueError:
        raise Unauthorized(details="Could not validate credentials")
    user = session.get(User, user_id)
    if not user or not user.is_active:
        raise Unauthorized(details="User not found or inactive")
    if security.needs_refresh(claims):
        logger.info("Refreshing session for user %s", user.id)
        setattr(
            request.state,
            REFRESHED_TOKEN_STATE,
            security.create_access_token(user.id),
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
