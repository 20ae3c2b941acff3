"""Per-request GraphQL context: services plus the caller resolved from the bearer token."""

from strawberry.fastapi import BaseContext

from api.container import Services
from phonebook.application import RequestIdentity

AUTHORIZATION_HEADER = "authorization"


class PhonebookContext(BaseContext):
    """
    The caller is resolved on first use, from the Authorization header of the
    HTTP request or WebSocket handshake, or from an explicit authorization value.
    """

    def __init__(self, services: Services, *, authorization: str | None = None) -> None:
        super().__init__()
        self.services = services
        self._authorization = authorization
        self._identity: RequestIdentity | None = None

    def _authorization_header(self) -> str | None:
        if self._authorization is not None:
            return self._authorization
        if self.request is None:
            return None
        return self.request.headers.get(AUTHORIZATION_HEADER)

    @property
    def identity(self) -> RequestIdentity:
        if self._identity is None:
            self._identity = self.services.identity.authenticate(self._authorization_header())
        return self._identity
