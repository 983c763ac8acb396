# clientauth/domain/services/identity_service.py

"""
Identity derivation for client authorizations.

A user holds at most one authorization per client: the resource name is
computed from the (user, client) pair, so a second create for the same pair
collides on the name in the registry.
"""

import re
from typing import Tuple

from clientauth.shared.utils.input_validation import InputValidator

NAME_SEPARATOR = ":"

_ESCAPES = {"%": "%25", NAME_SEPARATOR: "%3A"}
# Escaping at most triples each component
MAX_NAME_LENGTH = 2 * 3 * InputValidator.MAX_IDENTITY_LENGTH + len(NAME_SEPARATOR)
_UNESCAPES = {escaped: raw for raw, escaped in _ESCAPES.items()}
_ESCAPE_PATTERN = re.compile("[%:]")
_UNESCAPE_PATTERN = re.compile("%(?:25|3A)")


def _escape(component: str) -> str:
    return _ESCAPE_PATTERN.sub(lambda match: _ESCAPES[match.group(0)], component)


def _unescape(component: str) -> str:
    return _UNESCAPE_PATTERN.sub(lambda match: _UNESCAPES[match.group(0)], component)


def derive_name(user_name: str, client_name: str) -> str:
    """
    Compute the canonical name of the authorization of ``client_name`` by ``user_name``.

    Both components are escaped so that neither contains the separator,
    which keeps the mapping reversible and therefore collision free.

    Args:
        user_name: Identity of the granting user
        client_name: Identity of the authorized client application

    Returns:
        The derived resource name, e.g. ``alice:cli-1``

    Raises:
        ValueError: If either component is empty
    """
    if not user_name or not client_name:
        raise ValueError("user_name and client_name must be non-empty")
    return f"{_escape(user_name)}{NAME_SEPARATOR}{_escape(client_name)}"


def split_name(name: str) -> Tuple[str, str]:
    """Reverse :func:`derive_name`, returning ``(user_name, client_name)``."""
    parts = name.split(NAME_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"{name!r} is not a derived client authorization name")
    user_name, client_name = parts
    return _unescape(user_name), _unescape(client_name)
