# clientauth/shared/utils/input_validation.py

import re
from typing import Optional, Tuple


class InputValidator:
    """
    Syntax checks for the strings that make up a client authorization,
    complementing the pydantic shape checks done at the HTTP edge.
    """

    # Limits
    MAX_IDENTITY_LENGTH = 253
    MAX_SCOPE_LENGTH = 256
    MAX_LABEL_NAME_LENGTH = 63
    MAX_LABEL_PREFIX_LENGTH = 253
    MAX_LABEL_VALUE_LENGTH = 63

    # Control characters are never allowed in identities
    CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')
    # RFC 6749 scope-token: %x21 / %x23-5B / %x5D-7E
    SCOPE_PATTERN = re.compile(r'^[\x21\x23-\x5b\x5d-\x7e]+$')
    # Label names and values: alphanumerics with '-', '_' or '.' inside
    LABEL_PATTERN = re.compile(r'^[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$')
    # DNS subdomain used as an optional label key prefix
    DNS_SUBDOMAIN_PATTERN = re.compile(r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$')

    @classmethod
    def validate_identity(cls, value: str) -> Tuple[bool, Optional[str]]:
        """
        Validate a user or client identity.

        Args:
            value: String to be validated

        Returns:
            Tuple (valid, error_message)
        """
        if not value:
            return False, "must not be empty"

        if value != value.strip():
            return False, "must not start or end with whitespace"

        if len(value) > cls.MAX_IDENTITY_LENGTH:
            return False, f"must be no more than {cls.MAX_IDENTITY_LENGTH} characters"

        if cls.CONTROL_CHARS.search(value):
            return False, "must not contain control characters"

        return True, None

    @classmethod
    def validate_scope(cls, scope: str) -> Tuple[bool, Optional[str]]:
        if not scope:
            return False, "must not be empty"

        if len(scope) > cls.MAX_SCOPE_LENGTH:
            return False, f"must be no more than {cls.MAX_SCOPE_LENGTH} characters"

        if not cls.SCOPE_PATTERN.match(scope):
            return False, "must be printable ASCII without spaces, quotes or backslashes"

        return True, None

    @classmethod
    def validate_label_key(cls, key: str) -> Tuple[bool, Optional[str]]:
        """
        Validate a label key of the form ``[prefix/]name``.

        Args:
            key: Label key to be validated

        Returns:
            Tuple (valid, error_message)
        """
        prefix, _, name = key.rpartition("/")
        if "/" in key and not prefix:
            return False, "prefix must not be empty"

        if prefix:
            if len(prefix) > cls.MAX_LABEL_PREFIX_LENGTH or not cls.DNS_SUBDOMAIN_PATTERN.match(prefix):
                return False, "prefix must be a DNS subdomain"

        if not name or len(name) > cls.MAX_LABEL_NAME_LENGTH:
            return False, f"name must be 1-{cls.MAX_LABEL_NAME_LENGTH} characters"

        if not cls.LABEL_PATTERN.match(name):
            return False, "name must be alphanumeric with '-', '_' or '.' inside"

        return True, None

    @classmethod
    def validate_label_value(cls, value: str) -> Tuple[bool, Optional[str]]:
        # Empty values are allowed
        if not value:
            return True, None

        if len(value) > cls.MAX_LABEL_VALUE_LENGTH:
            return False, f"must be no more than {cls.MAX_LABEL_VALUE_LENGTH} characters"

        if not cls.LABEL_PATTERN.match(value):
            return False, "must be alphanumeric with '-', '_' or '.' inside"

        return True, None
