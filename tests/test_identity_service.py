import itertools

import pytest

from clientauth.domain.services.identity_service import (
    MAX_NAME_LENGTH,
    NAME_SEPARATOR,
    derive_name,
    split_name,
)
from clientauth.shared.utils.input_validation import InputValidator

CORPUS = [
    "a", "ab", "abc", "b", "bc",
    "alice", "alice:cli", "alice:", ":alice",
    ":", "::", "%", "%25", "%3A", "a%3Ab", "a:b",
    "cli-1", "cli-10", "user@example.com", "Ünïcødé",
]


def test_derive_name_joins_plain_components():
    assert derive_name("alice", "cli-1") == "alice:cli-1"


def test_derive_name_is_deterministic():
    assert derive_name("alice", "cli-1") == derive_name("alice", "cli-1")


def test_derive_name_has_exactly_one_separator():
    for user_name, client_name in itertools.product(CORPUS, repeat=2):
        assert derive_name(user_name, client_name).count(NAME_SEPARATOR) == 1


def test_derive_name_does_not_collide():
    pairs = list(itertools.product(CORPUS, repeat=2))
    names = {derive_name(user_name, client_name) for user_name, client_name in pairs}

    assert len(names) == len(pairs)


def test_split_name_reverses_derive_name():
    for user_name, client_name in itertools.product(CORPUS, repeat=2):
        assert split_name(derive_name(user_name, client_name)) == (user_name, client_name)


@pytest.mark.parametrize("user_name, client_name", [("", "cli-1"), ("alice", ""), ("", "")])
def test_derive_name_rejects_empty_components(user_name, client_name):
    with pytest.raises(ValueError):
        derive_name(user_name, client_name)


@pytest.mark.parametrize("name", ["alice", "a:b:c", ":cli", "alice:"])
def test_split_name_rejects_foreign_names(name):
    with pytest.raises(ValueError):
        split_name(name)


def test_longest_valid_pair_fits_max_name_length():
    longest = InputValidator.MAX_IDENTITY_LENGTH
    user_name, client_name = "%" * longest, ":" * longest

    assert InputValidator.validate_identity(user_name) == (True, None)
    assert InputValidator.validate_identity(client_name) == (True, None)
    assert len(derive_name(user_name, client_name)) == MAX_NAME_LENGTH
