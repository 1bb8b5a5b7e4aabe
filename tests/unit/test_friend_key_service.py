"""Unit tests for friend key and display-name generation."""

from __future__ import annotations

import re

import pytest

from songify.services.friend_key_service import WORDLIST, FriendKeyService
from songify.services.key_normalizer import normalize_key
from songify.utils.errors import FriendKeyGenerationError

_KEY_PATTERN = re.compile(r"^[a-z]+-[a-z]+-\d{1,2}$")
_NAME_PATTERN = re.compile(r"^[A-Z][a-z]+[A-Z][a-z]+\d{1,2}$")


class TestWordList:
    def test_full_bip39_english_list(self) -> None:
        assert len(WORDLIST) == 2048
        assert WORDLIST[0] == "abandon"
        assert WORDLIST[-1] == "zoo"

    def test_unique(self) -> None:
        assert len(set(WORDLIST)) == len(WORDLIST)

    def test_lowercase_letters_only(self) -> None:
        for word in WORDLIST:
            assert re.fullmatch(r"[a-z]+", word), word


class TestGenerate:
    def test_format(self) -> None:
        service = FriendKeyService()
        for _ in range(50):
            assert _KEY_PATTERN.match(service.generate(lambda key: False))

    def test_words_come_from_the_wordlist(self) -> None:
        words = set(WORDLIST)
        for _ in range(20):
            first, second, number = FriendKeyService().generate(lambda key: False).split("-")
            assert first in words
            assert second in words
            assert 0 <= int(number) < 100

    def test_generated_keys_are_already_normalized(self) -> None:
        key = FriendKeyService().generate(lambda key: False)
        assert normalize_key(key) == key

    def test_retries_on_collision(self) -> None:
        seen: list[str] = []

        def _exists(key: str) -> bool:
            seen.append(key)
            return len(seen) < 3

        key = FriendKeyService().generate(_exists)
        assert len(seen) == 3
        assert key == seen[-1]

    def test_gives_up_after_max_attempts(self) -> None:
        calls: list[str] = []

        def _always_taken(key: str) -> bool:
            calls.append(key)
            return True

        with pytest.raises(FriendKeyGenerationError):
            FriendKeyService(max_attempts=5).generate(_always_taken)
        assert len(calls) == 5


class TestGenerateName:
    def test_pascal_case_with_number(self) -> None:
        for _ in range(20):
            assert _NAME_PATTERN.match(FriendKeyService.generate_name())
