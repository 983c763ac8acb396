# clientauth/domain/services/validation_service.py

"""
Field-level rules for client authorizations.

``validate_new`` checks a record on its own; ``validate_update`` checks a
proposed version against the stored one. Both return every violation found
instead of stopping at the first.
"""

from typing import List

from clientauth.application.ports.outbound import IClientAuthorizationValidator
from clientauth.domain.models.client_authorization_domain_model import ClientAuthorization
from clientauth.domain.models.field_error import (
    DUPLICATE,
    FieldError,
    IMMUTABLE,
    INVALID,
    REQUIRED,
)
from clientauth.shared.utils.input_validation import InputValidator


class ClientAuthorizationValidator(IClientAuthorizationValidator):
    """
    Domain service validating client authorizations.
    """

    def validate_new(self, authorization: ClientAuthorization) -> List[FieldError]:
        """
        Check a record on its own.

        The name is not compared with user_name and client_name here: create
        derives it, and update compares identity with the stored version.
        """
        errors: List[FieldError] = []

        if not authorization.name:
            errors.append(FieldError(REQUIRED, "name"))

        for field_name in ("user_name", "client_name"):
            value = getattr(authorization, field_name)
            if not value:
                errors.append(FieldError(REQUIRED, field_name))
                continue
            is_valid, error_msg = InputValidator.validate_identity(value)
            if not is_valid:
                errors.append(FieldError(INVALID, field_name, value, error_msg))

        seen = set()
        for index, scope in enumerate(authorization.scopes):
            field_name = f"scopes[{index}]"
            is_valid, error_msg = InputValidator.validate_scope(scope)
            if not is_valid:
                errors.append(FieldError(INVALID, field_name, scope, error_msg))
            elif scope in seen:
                errors.append(FieldError(DUPLICATE, field_name, scope))
            seen.add(scope)

        for key, value in authorization.metadata.labels.items():
            is_valid, error_msg = InputValidator.validate_label_key(key)
            if not is_valid:
                errors.append(FieldError(INVALID, "metadata.labels", key, error_msg))
            is_valid, error_msg = InputValidator.validate_label_value(value)
            if not is_valid:
                errors.append(FieldError(INVALID, f"metadata.labels[{key}]", value, error_msg))

        return errors

    def validate_update(self, authorization: ClientAuthorization,
                        old: ClientAuthorization) -> List[FieldError]:
        """
        Reject changes to the fields that make up the identity of the record.

        The name is derived from user_name and client_name, so changing
        either would break the identity invariant.
        """
        errors: List[FieldError] = []

        for field_name in ("name", "user_name", "client_name"):
            new_value = getattr(authorization, field_name)
            if new_value != getattr(old, field_name):
                errors.append(FieldError(IMMUTABLE, field_name, new_value, "field is immutable"))

        new_meta, old_meta = authorization.metadata, old.metadata
        for field_name in ("namespace", "uid", "creation_timestamp"):
            new_value = getattr(new_meta, field_name)
            if new_value != getattr(old_meta, field_name):
                errors.append(FieldError(
                    IMMUTABLE, f"metadata.{field_name}", new_value, "field is immutable",
                ))

        return errors
