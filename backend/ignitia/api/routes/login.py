from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm

from ignitia import crud
from ignitia.api.deps import (
    CurrentUser,
    SessionDep,
    clear_session_cookie,
    set_session_cookie,
)
from ignitia.core import security
from ignitia.core.errors import InvalidInput, Unauthorized
from ignitia.models import Message, Token, UserCreate, UserPublic, UserRegister

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserPublic)
def register_user(session: SessionDep, user_in: UserRegister, response: Response) -> Any:
    """
    Create a new user and start a session for them.
    """
    user = crud.get_user_by_email(session=session, email=user_in.email)
    if user:
        raise InvalidInput("The user with this email already exists in the system")
    user_create = UserCreate.model_validate(user_in)
    user = crud.create_user(session=session, user_create=user_create)
    set_session_cookie(response, security.create_access_token(user.id))
    return user


@router.post("/login")
def login_access_token(
    session: SessionDep,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    response: Response,
) -> Token:
    """
    OAuth2 compatible token login. The token is also set as the session cookie.
    """
    user = crud.authenticate(
        session=session, email=form_data.username, password=form_data.password
    )
    if not user:
        raise Unauthorized("Incorrect email or password")
    if not user.is_active:
        raise Unauthorized("Inactive user")
    token = security.create_access_token(user.id)
    set_session_cookie(response, token)
    return Token(access_token=token)


@router.post("/logout")
def logout(response: Response) -> Message:
    clear_session_cookie(response)
    return Message(message="Signed out")


@router.get("/me", response_model=UserPublic)
def read_user_me(current_user: CurrentUser) -> Any:
    """
    Get current user.
    """
    return current_user
