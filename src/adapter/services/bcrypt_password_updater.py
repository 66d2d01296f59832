import bcrypt

from src.app.services.password_updater import PasswordUpdater
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return

BCRYPT_ROUNDS = 12


class BcryptPasswordUpdater(PasswordUpdater):
    """
    Stores new passwords as bcrypt hashes through the unit of work.

    Business Rules:
    - Password must not be blank
    - Hashed with bcrypt (cost factor 12)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def update_password(self, user: User, new_password: str) -> Result[None]:
        if new_password is None or not new_password.strip():
            return Return.err(Error("BLANK_PASSWORD", "Password can't be blank."))

        password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(BCRYPT_ROUNDS))
        user.password_hash = password_hash.decode()
        await self.uow.users.update(user)

        return Return.ok(None)
