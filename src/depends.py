from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.bcrypt_password_updater import BcryptPasswordUpdater
from src.adapter.services.jwt_session_service import JwtSessionService
from src.adapter.services.ses_mailer import SesMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.mailer import Mailer
from src.app.services.password_reset_config import PasswordResetConfig
from src.app.services.password_updater import PasswordUpdater
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_reset_config() -> PasswordResetConfig:
    return PasswordResetConfig.from_application_config(ApplicationConfig)


def get_mailer(
    config: PasswordResetConfig = Depends(get_password_reset_config),
) -> Mailer:
    return SesMailer(
        config,
        from_email=ApplicationConfig.MAIL_FROM,
        region=ApplicationConfig.AWS_REGION,
        development_mode=ApplicationConfig.MAIL_DEVELOPMENT_MODE,
    )


def get_password_updater(uow: UnitOfWork = Depends(get_unit_of_work)) -> PasswordUpdater:
    return BcryptPasswordUpdater(uow)


def get_session_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> SessionService:
    return JwtSessionService(uow)


def get_owner_id(
    request: Request,
    config: PasswordResetConfig = Depends(get_password_reset_config),
) -> Optional[UUID]:
    """
    Read the reset owner's id from the query string.

    The parameter name is configurable. A missing or malformed id is
    returned as None so the reset guards reject it like any unknown user.
    """
    raw_user_id = request.query_params.get(config.user_id_parameter)
    if not raw_user_id:
        return None
    try:
        return UUID(raw_user_id)
    except ValueError:
        return None
