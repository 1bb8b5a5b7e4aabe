"""Unit tests for the AuthVerifier façade."""

from __future__ import annotations

import hashlib
import re
from datetime import timedelta

import pytest

from songify.models.auth import Role
from songify.providers.cache.memory_hash_cache import MemoryHashCache
from songify.services.auth_verifier import AuthVerifier
from songify.services.daily_salt import DailySaltProvider
from songify.services.key_hasher import KeyHasher
from songify.services.token_issuer import TokenIssuer
from songify.utils.clock import FixedClock
from songify.utils.errors import AuthFailure, HashingFailed, TokenExpired, TokenInvalidSignature, TokenMalformed
from tests.conftest import DAY_SEVEN_NOON, TEST_ADMIN_PASSWORD

_HEX64 = re.compile(r"^[0-9a-f]{64}$")


@pytest.fixture()
def day_seven_hash() -> str:
    """The hash a browser on UTC day 7 computes for "  MyKey42 "."""
    return KeyHasher().derive("mykey42", "7")


# ======================================================================
# Friend access
# ======================================================================


class TestVerifyFriend:
    def test_end_to_end_day_seven(
        self, verifier: AuthVerifier, token_issuer: TokenIssuer, day_seven_hash: str
    ) -> None:
        assert _HEX64.match(day_seven_hash)

        token = verifier.verify_friend("  MyKey42 ", day_seven_hash, "abc")

        claims = token_issuer.validate_token(token.token)
        assert claims.role is Role.FRIEND
        assert claims.session_id == "abc"

    def test_mismatch_raises_auth_failure(self, verifier: AuthVerifier, day_seven_hash: str) -> None:
        wrong = ("0" if day_seven_hash[0] != "0" else "1") + day_seven_hash[1:]
        with pytest.raises(AuthFailure):
            verifier.verify_friend("  MyKey42 ", wrong, "abc")

    def test_yesterdays_hash_is_rejected_with_same_message(self, verifier: AuthVerifier) -> None:
        yesterday = KeyHasher().derive("mykey42", "6")
        with pytest.raises(AuthFailure) as wrong_day:
            verifier.verify_friend("mykey42", yesterday, "abc")
        with pytest.raises(AuthFailure) as wrong_key:
            verifier.verify_friend("otherkey", KeyHasher().derive("mykey42", "7"), "abc")
        assert wrong_day.value.message == wrong_key.value.message

    def test_uppercase_client_hash_accepted(self, verifier: AuthVerifier, day_seven_hash: str) -> None:
        token = verifier.verify_friend("mykey42", f" {day_seven_hash.upper()} ", "abc")
        assert token.role is Role.FRIEND

    def test_empty_key_rejected(self, verifier: AuthVerifier, day_seven_hash: str) -> None:
        with pytest.raises(AuthFailure):
            verifier.verify_friend("", day_seven_hash, "abc")

    def test_empty_session_id_rejected_before_hashing(
        self, verifier: AuthVerifier, hash_cache: MemoryHashCache, day_seven_hash: str
    ) -> None:
        with pytest.raises(AuthFailure):
            verifier.verify_friend("mykey42", day_seven_hash, "")
        assert len(hash_cache) == 0

    def test_expected_hash_is_cached_per_day(
        self, verifier: AuthVerifier, hash_cache: MemoryHashCache, day_seven_hash: str
    ) -> None:
        assert verifier.expected_friend_hash("MyKey42") == day_seven_hash
        assert verifier.expected_friend_hash("  mykey42") == day_seven_hash
        assert len(hash_cache) == 1

    def test_salt_rotates_at_midnight(
        self, verifier: AuthVerifier, fixed_clock: FixedClock, day_seven_hash: str
    ) -> None:
        fixed_clock.set(DAY_SEVEN_NOON.replace(hour=23, minute=59, second=59))
        assert verifier.verify_friend("mykey42", day_seven_hash, "abc").role is Role.FRIEND

        fixed_clock.advance(seconds=1)
        with pytest.raises(AuthFailure):
            verifier.verify_friend("mykey42", day_seven_hash, "abc")
        day_eight_hash = KeyHasher().derive("mykey42", "8")
        assert verifier.verify_friend("mykey42", day_eight_hash, "abc").session_id == "abc"

    def test_hashing_failure_propagates(self, verifier: AuthVerifier, monkeypatch: pytest.MonkeyPatch) -> None:
        def _boom(*args: object, **kwargs: object) -> bytes:
            raise MemoryError()

        monkeypatch.setattr(hashlib, "scrypt", _boom)
        with pytest.raises(HashingFailed):
            verifier.verify_friend("mykey42", "00" * 32, "abc")


# ======================================================================
# Session matching
# ======================================================================


class TestMatchFriendSession:
    def test_finds_matching_session(self, verifier: AuthVerifier) -> None:
        sessions = {"s1": "amber-river-1", "s2": "bold-comet-2"}
        client_hash = KeyHasher().derive("bold-comet-2", "7")
        token = verifier.match_friend_session(client_hash, sessions)
        assert token.session_id == "s2"
        assert token.role is Role.FRIEND

    def test_no_match(self, verifier: AuthVerifier) -> None:
        with pytest.raises(AuthFailure):
            verifier.match_friend_session("ab" * 32, {"s1": "amber-river-1"})

    def test_empty_directory(self, verifier: AuthVerifier) -> None:
        with pytest.raises(AuthFailure):
            verifier.match_friend_session("ab" * 32, {})

    def test_repeated_scans_reuse_cache(self, verifier: AuthVerifier, hash_cache: MemoryHashCache) -> None:
        sessions = {"s1": "amber-river-1", "s2": "bold-comet-2"}
        client_hash = KeyHasher().derive("amber-river-1", "7")
        verifier.match_friend_session(client_hash, sessions)
        verifier.match_friend_session(client_hash, sessions)
        # s1 matched first both times, so only its hash was ever computed.
        assert len(hash_cache) == 1


# ======================================================================
# Admin access
# ======================================================================


class TestVerifyAdmin:
    def test_correct_password(self, verifier: AuthVerifier, token_issuer: TokenIssuer) -> None:
        token = verifier.verify_admin(TEST_ADMIN_PASSWORD)
        assert token.role is Role.ADMIN
        assert token.expires_at - token.issued_at == timedelta(days=7)
        assert token_issuer.validate_token(token.token).is_admin

    @pytest.mark.parametrize(
        "attempt",
        ["", "wrong", TEST_ADMIN_PASSWORD.upper(), f" {TEST_ADMIN_PASSWORD}", TEST_ADMIN_PASSWORD + "x"],
    )
    def test_anything_else_fails(self, verifier: AuthVerifier, attempt: str) -> None:
        with pytest.raises(AuthFailure):
            verifier.verify_admin(attempt)

    def test_empty_configured_password_disables_portal(
        self, hasher: KeyHasher, hash_cache: MemoryHashCache, token_issuer: TokenIssuer, fixed_clock: FixedClock
    ) -> None:
        locked = AuthVerifier(hasher, DailySaltProvider(fixed_clock), hash_cache, token_issuer, admin_password="")
        with pytest.raises(AuthFailure):
            locked.verify_admin("")

    def test_session_bound_admin_token(self, verifier: AuthVerifier) -> None:
        token = verifier.issue_session_admin_token("s1")
        assert verifier.validate_token(token.token) == (Role.ADMIN, "s1")


# ======================================================================
# Token validation
# ======================================================================


class TestValidateToken:
    def test_returns_role_and_session(self, verifier: AuthVerifier, day_seven_hash: str) -> None:
        token = verifier.verify_friend("mykey42", day_seven_hash, "abc")
        assert verifier.validate_token(token.token) == (Role.FRIEND, "abc")

    def test_expired(self, verifier: AuthVerifier, fixed_clock: FixedClock, day_seven_hash: str) -> None:
        token = verifier.verify_friend("mykey42", day_seven_hash, "abc")
        fixed_clock.advance(hours=12, seconds=1)
        with pytest.raises(TokenExpired):
            verifier.validate_token(token.token)

    def test_foreign_signature(self, verifier: AuthVerifier, fixed_clock: FixedClock) -> None:
        other = TokenIssuer("other-secret-0123456789abcdef-xyz", timedelta(days=1), timedelta(hours=1), fixed_clock)
        with pytest.raises(TokenInvalidSignature):
            verifier.validate_token(other.issue_admin_token().token)

    def test_garbage(self, verifier: AuthVerifier) -> None:
        with pytest.raises(TokenMalformed):
            verifier.validate_token("not.a.token")
