from typing import Optional

from fastapi import status
from src.libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        redirect_to: Optional[str] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.redirect_to = redirect_to
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
