"""
Credential verification against legacy password-hash encodings.

User tables adopted by this provider were written by other systems, each with
its own idea of how to store a password. The repository cannot migrate those
hashes, so it verifies them in whatever encoding the configuration declares.

Manifesto:
    - **Closed set of schemes:** ``AdaptiveSaltedHash``, ``IteratedDerivation``
      and ``PlainDigest`` are the only variants; which one applies is decided
      once, when the validator is built, not re-parsed per login
    - **Never crash a login:** a stored hash that does not parse is a
      non-match, logged as ``credential_malformed``
    - **Reproduce, don't repair:** legacy quirks (lower-casing the password
      before a plain digest) stay inside the variant that needs them

Architecture:
    ::

        QueryConfiguration ──resolve_scheme()──> CredentialScheme
                                                   │
              blowfish=True ─────────────> AdaptiveSaltedHash   bcrypt.checkpw
              hash_function="PBKDF2-SHA256" ──> IteratedDerivation  $iter$salt$hex
              hash_function=<digest name> ────> PlainDigest(name)   hex(digest(lower(pw)))

        CredentialValidator.validate(username, password)
            │
            ├─ executor.execute(find_password_hash, None, read_str, username)
            │     Err / Ok(None) / Ok("") ──> False
            └─ scheme.verify(password, stored) ──> bool

Stored formats:
    - Adaptive salted hash: a bcrypt string (``$2a$``/``$2b$``/``$2y$``)
    - Iterated derivation: ``$<iterations>$<salt>$<derivedKeyHex>``, key is
      PBKDF2-HMAC-SHA256 over the UTF-8 password and UTF-8 salt, 32 bytes
    - Plain digest: bare lower-case hex of the named digest over the
      lower-cased UTF-8 password

Guardrails:
    ❌ DON'T: Log the submitted password or the stored hash
    ✅ DO: Log the username, the scheme and the outcome

    ❌ DON'T: "Fix" the lower-casing in PlainDigest
    ✅ DO: Keep it; the stored digests were produced that way

Tags:
    credentials, password-hashing, bcrypt, pbkdf2, legacy, dbuser

Doc-Types:
    - API Reference
    - Legacy Interop Guide
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Protocol

import bcrypt

from dbuser.core.errors import ConfigError, MalformedCredentialError, UnsupportedOperationError
from dbuser.core.logging import get_logger
from dbuser.core.query import QueryExecutor
from dbuser.core.transforms import read_str
from dbuser.users.config import QueryConfiguration

logger = get_logger(__name__)

PBKDF2_SHA256 = "PBKDF2-SHA256"
PBKDF2_KEY_LENGTH = 32
MAX_ITERATIONS = 2**31 - 1

# Names legacy systems use for digests, mapped to hashlib names.
_DIGEST_ALIASES: dict[str, str] = {
    "md2": "md2",
    "md5": "md5",
    "sha": "sha1",
    "sha1": "sha1",
    "sha-1": "sha1",
    "sha224": "sha224",
    "sha-224": "sha224",
    "sha256": "sha256",
    "sha-256": "sha256",
    "sha384": "sha384",
    "sha-384": "sha384",
    "sha512": "sha512",
    "sha-512": "sha512",
    "sha-512/224": "sha512_224",
    "sha-512/256": "sha512_256",
    "sha3-224": "sha3_224",
    "sha3-256": "sha3_256",
    "sha3-384": "sha3_384",
    "sha3-512": "sha3_512",
}


class CredentialScheme(Protocol):
    """One way of checking a password against a stored credential string."""

    def verify(self, password: str, stored: str) -> bool:
        ...


@dataclass(frozen=True)
class AdaptiveSaltedHash:
    """bcrypt: the stored string carries its own salt and cost factor.

    Only the first 72 bytes of the password take part, as in every bcrypt
    implementation that wrote the stored hashes.
    """

    def verify(self, password: str, stored: str) -> bool:
        if not stored:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8")[:72], stored.encode("utf-8"))
        except ValueError as e:
            raise MalformedCredentialError("Stored value is not a bcrypt hash", cause=e) from e


@dataclass(frozen=True)
class IteratedDerivation:
    """PBKDF2-HMAC-SHA256 over ``$<iterations>$<salt>$<derivedKeyHex>``."""

    key_length: int = PBKDF2_KEY_LENGTH

    @staticmethod
    def parse(stored: str) -> tuple[int, str, str]:
        """Split a stored credential into ``(iterations, salt, expected)``."""
        components = stored.split("$")
        if len(components) != 4 or components[0] != "":
            raise MalformedCredentialError(
                f"Expected 4 '$'-separated fields, got {len(components)}"
            )
        _, iterations, salt, expected = components
        try:
            rounds = int(iterations)
        except ValueError as e:
            raise MalformedCredentialError("Iteration count is not an integer", cause=e) from e
        if not 0 < rounds <= MAX_ITERATIONS:
            raise MalformedCredentialError(f"Iteration count out of range: {rounds}")
        return rounds, salt, expected

    def derive(self, password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt.encode("utf-8"),
            iterations,
            dklen=self.key_length,
        ).hex()

    def verify(self, password: str, stored: str) -> bool:
        iterations, salt, expected = self.parse(stored)
        return self.derive(password, salt, iterations) == expected


@dataclass(frozen=True)
class PlainDigest:
    """Unsalted hex digest of the *lower-cased* password.

    The lower-casing reproduces how the legacy system wrote these hashes.
    """

    name: str

    def __post_init__(self) -> None:
        try:
            digest = hashlib.new(self.name)
        except ValueError as e:
            raise ConfigError(f"Unsupported hash function: {self.name}", cause=e) from e
        if digest.digest_size == 0:
            raise ConfigError(f"Variable-length digest not supported: {self.name}")

    def hexdigest(self, password: str) -> str:
        return hashlib.new(self.name, password.lower().encode("utf-8")).hexdigest()

    def verify(self, password: str, stored: str) -> bool:
        return self.hexdigest(password) == stored


def digest_name(hash_function: str) -> str:
    """Map a configured digest identifier (``SHA-256``, ``MD5``...) to its hashlib name."""
    key = hash_function.strip().lower()
    return _DIGEST_ALIASES.get(key, key.replace("-", "_"))


def resolve_scheme(config: QueryConfiguration) -> CredentialScheme:
    """Pick the credential scheme the configuration describes.

    Raises:
        ConfigError: If the configured digest is not available.
    """
    if config.blowfish:
        return AdaptiveSaltedHash()
    if config.hash_function.upper() == PBKDF2_SHA256:
        return IteratedDerivation()
    return PlainDigest(digest_name(config.hash_function))


class CredentialValidator:
    """Checks a submitted password against the stored credential of a user."""

    def __init__(self, executor: QueryExecutor, config: QueryConfiguration):
        self._executor = executor
        self._config = config
        self._scheme = resolve_scheme(config)
        logger.info("credential_scheme_resolved", scheme=type(self._scheme).__name__)

    @property
    def scheme(self) -> CredentialScheme:
        return self._scheme

    def validate(self, username: str, password: str) -> bool:
        """Whether ``password`` matches the stored credential of ``username``.

        Never raises: a missing user, a failed lookup, an unusable data source
        (including a missing driver) and a malformed stored value are all
        ``False``.
        """
        try:
            result = self._executor.execute(
                self._config.find_password_hash, None, read_str, username
            )
        except ConfigError as e:
            logger.error(
                "credential_lookup_failed",
                username=username,
                error_type=type(e).__name__,
                error=e.message,
            )
            return False
        stored = result.unwrap_or(None)
        if not stored:
            logger.info(
                "credential_not_found",
                username=username,
                lookup_failed=result.is_err(),
            )
            return False

        try:
            matched = self._scheme.verify(password, stored)
        except MalformedCredentialError as e:
            logger.warning(
                "credential_malformed",
                username=username,
                scheme=type(self._scheme).__name__,
                reason=e.message,
            )
            return False

        logger.info("credential_checked", username=username, matched=matched)
        return matched

    def update(self, username: str, password: str) -> bool:
        raise UnsupportedOperationError("Password update not supported")


__all__ = [
    "PBKDF2_SHA256",
    "CredentialScheme",
    "AdaptiveSaltedHash",
    "IteratedDerivation",
    "PlainDigest",
    "digest_name",
    "resolve_scheme",
    "CredentialValidator",
]
