import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.mailer import Mailer
from src.app.services.password_reset_config import PasswordResetConfig
from src.app.services.password_updater import PasswordUpdater
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_resets import (
    FORBIDDEN,
    BeginPasswordResetEditUseCase,
    CompletePasswordResetUseCase,
    CompletePasswordResetResponse,
    EditPasswordResponse,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from src.depends import (
    get_mailer,
    get_owner_id,
    get_password_reset_config,
    get_password_updater,
    get_session_service,
    get_unit_of_work,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/passwords", tags=["Password Resets"])

NEW_PASSWORD_RESET_PATH = "/passwords/new"


class NewPasswordResetResponse(BaseModel):
    """Describes the form used to request a reset link"""

    action: str
    method: str
    fields: list[str]


@router.get("/new", status_code=status.HTTP_200_OK, response_model=NewPasswordResetResponse)
async def new_password_reset():
    """
    Request-a-reset form

    Entry state of the flow; forbidden reset links are sent back here.
    """
    return NewPasswordResetResponse(action="/passwords", method="POST", fields=["email"])


class RequestPasswordResetRequest(BaseModel):
    """
    Request password reset HTTP request payload
    """

    email: EmailStr = Field(..., description="Email address of the account")


@router.post("", status_code=status.HTTP_200_OK, response_model=RequestPasswordResetResponse)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config: PasswordResetConfig = Depends(get_password_reset_config),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Request Password Reset

    Creates a reset link for the account and emails it.

    Security:
        - No email enumeration (same response for known/unknown emails)
        - Email delivery problems never change the response

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(uow, config, mailer)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/edit", status_code=status.HTTP_200_OK, response_model=EditPasswordResponse)
async def edit_password(
    token: Optional[str] = Query(default=None, description="Reset token from the email link"),
    user_id: Optional[UUID] = Depends(get_owner_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check Reset Link

    Called before showing the new-password form. The owner id is read from
    the configured user id query parameter.

    Raises:
        - 403 Forbidden: missing, unknown or expired link (one generic message)
        - 500 Internal Server Error: Server error
    """
    use_case = BeginPasswordResetEditUseCase(uow)
    result = await use_case.execute(user_id, token)

    if result.is_err():
        error = result.error
        if error.code == FORBIDDEN:
            raise ClientError(
                error,
                status_code=status.HTTP_403_FORBIDDEN,
                redirect_to=NEW_PASSWORD_RESET_PATH,
            )
        raise ServerError(error)

    return result.value


class NewPassword(BaseModel):
    password: Optional[str] = Field(default=None, description="New password")


class UpdatePasswordRequest(BaseModel):
    """
    Update password HTTP request payload

    The password belongs under "password_reset". The older "user" key is
    still read, with a deprecation warning.
    """

    password_reset: Optional[NewPassword] = None
    user: Optional[NewPassword] = None

    def new_password(self) -> str:
        if self.password_reset is None and self.user is not None:
            logger.warning(
                'Deprecated payload: send the password under "password_reset" instead of "user"'
            )
            return self.user.password or ""
        if self.password_reset is None:
            return ""
        return self.password_reset.password or ""


@router.put("", status_code=status.HTTP_200_OK, response_model=CompletePasswordResetResponse)
async def update_password(
    request: Optional[UpdatePasswordRequest] = None,
    token: Optional[str] = Query(default=None, description="Reset token from the email link"),
    user_id: Optional[UUID] = Depends(get_owner_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config: PasswordResetConfig = Depends(get_password_reset_config),
    password_updater: PasswordUpdater = Depends(get_password_updater),
    session_service: SessionService = Depends(get_session_service),
):
    """
    Complete Password Reset

    Re-checks the reset link, stores the new password, invalidates every
    outstanding reset link of the user and signs the user in.

    Raises:
        - 403 Forbidden: missing, unknown or expired link
        - 422 Unprocessable Entity: new password rejected; the link stays valid
        - 500 Internal Server Error: Server error
    """
    use_case = CompletePasswordResetUseCase(uow, config, password_updater, session_service)
    new_password = request.new_password() if request is not None else ""
    result = await use_case.execute(user_id, token, new_password)

    if result.is_err():
        error = result.error
        if error.code == FORBIDDEN:
            raise ClientError(
                error,
                status_code=status.HTTP_403_FORBIDDEN,
                redirect_to=NEW_PASSWORD_RESET_PATH,
            )
        elif error.code == "BLANK_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value
