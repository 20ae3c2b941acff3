"""Data transfer objects passed between the API layer and the use cases."""

from dataclasses import dataclass, field
from enum import Enum

from phonebook.application.errors import AuthenticationError
from phonebook.domain import Person, User

# Topic for events published after a person is created.
PERSON_ADDED = "PERSON_ADDED"


class PhoneFilter(Enum):
    YES = "YES"
    NO = "NO"


@dataclass(frozen=True)
class UserProfile:
    """A user with its friends resolved to full Person records."""

    user: User
    friends: list[Person] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.username


@dataclass(frozen=True)
class RequestIdentity:
    """
    The caller of one request: a resolved user, nobody (anonymous), or a
    rejected token. A rejected token only fails the fields that read the user.
    """

    user: UserProfile | None = None
    error: str | None = None

    @property
    def current_user(self) -> UserProfile | None:
        """Return the user, None when anonymous. Raises AuthenticationError on a rejected token."""
        if self.error is not None:
            raise AuthenticationError(self.error)
        return self.user

    def require_user(self) -> UserProfile:
        user = self.current_user
        if user is None:
            raise AuthenticationError("not authenticated")
        return user


ANONYMOUS = RequestIdentity()
