"""Identity layer: bearer tokens to users, and login."""

import logging

from phonebook.application.dto import ANONYMOUS, RequestIdentity, UserProfile
from phonebook.application.errors import InputValidationError, InvalidTokenError
from phonebook.application.phonebook_service import lookup_key
from phonebook.application.ports import (
    PasswordHasher,
    PersonRepository,
    TokenCodec,
    UserRepository,
)

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class IdentityService:
    """Issues tokens on login and resolves Authorization headers to a RequestIdentity."""

    def __init__(
        self,
        users: UserRepository,
        persons: PersonRepository,
        codec: TokenCodec,
        hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._persons = persons
        self._codec = codec
        self._hasher = hasher

    def authenticate(self, authorization: str | None) -> RequestIdentity:
        """Resolve an Authorization header value.

        No header, or a header without the "Bearer " scheme, is anonymous.
        A token that fails verification, or names an unknown user, gives an
        identity that raises AuthenticationError when the user is read.
        """
        if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
            return ANONYMOUS
        token = authorization[len(BEARER_PREFIX):].strip()
        try:
            claims = self._codec.decode(token)
        except InvalidTokenError as e:
            logger.warning("Rejected bearer token: %s", e)
            return RequestIdentity(error="invalid token")
        user_id = claims.get("id")
        user = self._users.get_by_id(str(user_id)) if user_id else None
        if user is None:
            logger.warning("Bearer token names unknown user %r", user_id)
            return RequestIdentity(error="invalid token")
        profile = UserProfile(user=user, friends=self._persons.get_many(user.friend_ids))
        return RequestIdentity(user=profile)

    def login(self, username: str, password: str) -> str:
        """Return a signed token for valid credentials. Raises InputValidationError otherwise."""
        user = self._users.find_by_username(lookup_key(username))
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Failed login for %r", username)
            raise InputValidationError("wrong credentials")
        return self._codec.encode({"username": user.username, "id": user.id})
