"""dbuser.users -- the user repository and its credential schemes."""

from dbuser.users.config import QueryConfiguration
from dbuser.users.credentials import (
    AdaptiveSaltedHash,
    CredentialValidator,
    IteratedDerivation,
    PlainDigest,
    resolve_scheme,
)
from dbuser.users.repository import UserRepository

__all__ = [
    "QueryConfiguration",
    "UserRepository",
    "CredentialValidator",
    "AdaptiveSaltedHash",
    "IteratedDerivation",
    "PlainDigest",
    "resolve_scheme",
]
