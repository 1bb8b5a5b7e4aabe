"""Shared pytest fixtures for the Songify auth test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from songify.config.settings import Settings
from songify.providers.cache.memory_hash_cache import MemoryHashCache
from songify.services.auth_verifier import AuthVerifier
from songify.services.daily_salt import DailySaltProvider
from songify.services.key_hasher import KeyHasher
from songify.services.token_issuer import TokenIssuer
from songify.utils.clock import FixedClock

TEST_SECRET = "test-signing-secret-0123456789abcdef"
TEST_ADMIN_PASSWORD = "correct horse battery staple"

# Noon on the 7th: far from either midnight, so the salt is always "7".
DAY_SEVEN_NOON = datetime(2024, 3, 7, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(DAY_SEVEN_NOON)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with test secrets; ignores any developer .env file."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        admin_portal_password=TEST_ADMIN_PASSWORD,
        admin_token_duration=timedelta(days=7),
        friend_token_duration=timedelta(hours=12),
        app_env="test",
        log_level="WARNING",
    )


@pytest.fixture
def hasher() -> KeyHasher:
    return KeyHasher()


@pytest.fixture
def hash_cache() -> MemoryHashCache:
    return MemoryHashCache(max_entries=64)


@pytest.fixture
def token_issuer(fixed_clock: FixedClock) -> TokenIssuer:
    return TokenIssuer(
        secret=TEST_SECRET,
        admin_duration=timedelta(days=7),
        friend_duration=timedelta(hours=12),
        clock=fixed_clock,
    )


@pytest.fixture
def verifier(
    hasher: KeyHasher,
    hash_cache: MemoryHashCache,
    token_issuer: TokenIssuer,
    fixed_clock: FixedClock,
) -> AuthVerifier:
    return AuthVerifier(
        hasher=hasher,
        salt_provider=DailySaltProvider(fixed_clock),
        cache=hash_cache,
        issuer=token_issuer,
        admin_password=TEST_ADMIN_PASSWORD,
    )
