"""Tests for credential schemes and the credential validator."""

from __future__ import annotations

import hashlib
import sqlite3
import sys

import bcrypt
import pytest

from dbuser.core.errors import ConfigError, MalformedCredentialError, UnsupportedOperationError
from dbuser.core.query import QueryExecutor
from dbuser.users.config import QueryConfiguration
from dbuser.users.credentials import (
    PBKDF2_SHA256,
    AdaptiveSaltedHash,
    CredentialValidator,
    IteratedDerivation,
    PlainDigest,
    digest_name,
    resolve_scheme,
)


@pytest.fixture(scope="module")
def bcrypt_secret() -> str:
    return bcrypt.hashpw(b"secret", bcrypt.gensalt(rounds=4)).decode("ascii")


def validator_for(provider, query_config, **overrides) -> CredentialValidator:
    config = query_config.model_copy(update=overrides)
    return CredentialValidator(QueryExecutor(provider, config.rdbms), config)


# =============================================================================
# Schemes
# =============================================================================


class TestAdaptiveSaltedHash:
    def test_match(self, bcrypt_secret):
        assert AdaptiveSaltedHash().verify("secret", bcrypt_secret) is True

    def test_mismatch(self, bcrypt_secret):
        assert AdaptiveSaltedHash().verify("Secret", bcrypt_secret) is False

    def test_2a_prefix(self, bcrypt_secret):
        legacy = "$2a$" + bcrypt_secret[4:]
        assert AdaptiveSaltedHash().verify("secret", legacy) is True

    def test_long_password_truncated_to_72_bytes(self):
        password = "p" * 80
        stored = bcrypt.hashpw(password.encode()[:72], bcrypt.gensalt(rounds=4)).decode()
        assert AdaptiveSaltedHash().verify(password, stored) is True
        assert AdaptiveSaltedHash().verify("p" * 72 + "different", stored) is True

    def test_malformed(self):
        with pytest.raises(MalformedCredentialError):
            AdaptiveSaltedHash().verify("secret", "not-a-bcrypt-hash")

    def test_empty_stored(self):
        assert AdaptiveSaltedHash().verify("secret", "") is False


class TestIteratedDerivation:
    def test_match(self):
        expected = hashlib.pbkdf2_hmac("sha256", b"secret", b"NaCl", 1000, dklen=32).hex()
        assert IteratedDerivation().verify("secret", f"$1000$NaCl${expected}") is True

    def test_mismatch(self):
        expected = hashlib.pbkdf2_hmac("sha256", b"secret", b"NaCl", 1000, dklen=32).hex()
        assert IteratedDerivation().verify("secret!", f"$1000$NaCl${expected}") is False

    def test_derive_length(self):
        assert len(IteratedDerivation().derive("secret", "salt", 1)) == 64

    def test_parse(self):
        assert IteratedDerivation.parse("$10$abc$ff") == (10, "abc", "ff")

    @pytest.mark.parametrize(
        "stored",
        [
            "$1000$NaCl",
            "1000$NaCl$ab$cd",
            "$1000$NaCl$ab$cd",
            "$many$NaCl$ab",
            "$0$NaCl$ab",
            "$-5$NaCl$ab",
            "$3000000000$NaCl$ab",
            "$99999999999$NaCl$ab",
            "",
        ],
    )
    def test_malformed(self, stored):
        with pytest.raises(MalformedCredentialError):
            IteratedDerivation().verify("secret", stored)


class TestPlainDigest:
    def test_sha256_lowercases_password(self):
        stored = hashlib.sha256(b"secret").hexdigest()
        scheme = PlainDigest("sha256")
        assert scheme.verify("secret", stored) is True
        assert scheme.verify("SECRET", stored) is True
        assert scheme.verify("secret!", stored) is False

    def test_md5(self):
        assert PlainDigest("md5").verify("Pw", hashlib.md5(b"pw").hexdigest()) is True

    def test_uppercase_stored_hex_does_not_match(self):
        stored = hashlib.sha256(b"secret").hexdigest().upper()
        assert PlainDigest("sha256").verify("secret", stored) is False

    def test_unknown_digest(self):
        with pytest.raises(ConfigError, match="Unsupported hash function"):
            PlainDigest("whirlpool-9000")

    @pytest.mark.parametrize("name", ["shake_128", "shake_256"])
    def test_variable_length_digest_rejected(self, name):
        with pytest.raises(ConfigError, match="Variable-length digest"):
            PlainDigest(name)


class TestDigestName:
    @pytest.mark.parametrize(
        ("configured", "expected"),
        [
            ("SHA-256", "sha256"),
            ("sha-1", "sha1"),
            ("SHA", "sha1"),
            ("MD5", "md5"),
            ("SHA-512", "sha512"),
            ("SHA3-256", "sha3_256"),
            (" sha-384 ", "sha384"),
            ("blake2b", "blake2b"),
        ],
    )
    def test_aliases(self, configured, expected):
        assert digest_name(configured) == expected


class TestResolveScheme:
    def test_blowfish_wins(self, query_config):
        config = query_config.model_copy(update={"blowfish": True, "hash_function": PBKDF2_SHA256})
        assert isinstance(resolve_scheme(config), AdaptiveSaltedHash)

    def test_pbkdf2(self, query_config):
        config = query_config.model_copy(update={"hash_function": "pbkdf2-sha256"})
        assert isinstance(resolve_scheme(config), IteratedDerivation)

    def test_plain_digest(self, query_config):
        scheme = resolve_scheme(query_config)
        assert scheme == PlainDigest("sha256")

    def test_unknown_digest(self, query_config):
        config = query_config.model_copy(update={"hash_function": "NOPE-1"})
        with pytest.raises(ConfigError):
            resolve_scheme(config)

    def test_shake_rejected(self, query_config):
        config = query_config.model_copy(update={"hash_function": "SHAKE-128"})
        with pytest.raises(ConfigError):
            resolve_scheme(config)


# =============================================================================
# Validator
# =============================================================================


class TestCredentialValidator:
    def test_plain_digest_user(self, provider, query_config):
        validator = validator_for(provider, query_config)
        assert validator.validate("alice", "secret") is True
        assert validator.validate("alice", "SECRET") is True
        assert validator.validate("alice", "wrong") is False

    def test_pbkdf2_user(self, provider, query_config):
        validator = validator_for(provider, query_config, hash_function=PBKDF2_SHA256)
        assert validator.validate("bob", "secret") is True
        assert validator.validate("bob", "SECRET") is False

    def test_malformed_hash_is_false(self, provider, query_config):
        validator = validator_for(provider, query_config, hash_function=PBKDF2_SHA256)
        assert validator.validate("carol", "not-a-hash") is False

    def test_malformed_bcrypt_is_false(self, provider, query_config):
        validator = validator_for(provider, query_config, blowfish=True)
        assert validator.validate("carol", "secret") is False

    @pytest.mark.parametrize("username", ["nobody", "dave", "mallory"])
    def test_absent_null_or_empty_hash(self, provider, query_config, username):
        assert validator_for(provider, query_config).validate(username, "") is False

    def test_unavailable_data_source(self, query_config):
        from dbuser.core.adapters import StaticDataSourceProvider

        validator = validator_for(StaticDataSourceProvider(None), query_config)
        assert validator.validate("alice", "secret") is False

    def test_update_not_supported(self, provider, query_config):
        with pytest.raises(UnsupportedOperationError, match="Password update not supported"):
            validator_for(provider, query_config).update("alice", "new")

    def test_scheme_resolved_once(self, provider, query_config):
        validator = validator_for(provider, query_config, blowfish=True)
        assert isinstance(validator.scheme, AdaptiveSaltedHash)

    def test_bcrypt_user(self, bcrypt_user, provider, query_config):
        validator = validator_for(provider, query_config, blowfish=True)
        assert validator.validate(bcrypt_user, "secret") is True
        assert validator.validate(bcrypt_user, "Secret") is False
        assert validator.validate(bcrypt_user, "") is False

    def test_iteration_count_out_of_range_is_false(self, db_path, provider, query_config):
        conn = sqlite3.connect(db_path)
        try:
            conn.execute(
                "UPDATE users SET password_hash = ? WHERE username = ?",
                ("$99999999999$NaCl$ab", "carol"),
            )
            conn.commit()
        finally:
            conn.close()
        validator = validator_for(provider, query_config, hash_function=PBKDF2_SHA256)
        assert validator.validate("carol", "secret") is False

    def test_missing_driver_is_false(self, monkeypatch, query_config):
        from dbuser.core.adapters import PostgreSQLAdapter, StaticDataSourceProvider

        monkeypatch.setitem(sys.modules, "psycopg2", None)
        provider = StaticDataSourceProvider(PostgreSQLAdapter())
        assert validator_for(provider, query_config).validate("alice", "secret") is False
