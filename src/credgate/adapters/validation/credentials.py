"""
Credential validator - Implements CredentialValidator protocol.

Validates untrusted registration payloads with pydantic and reports
one message per failing field, keyed by the field's wire name.
"""

from collections.abc import Mapping
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from credgate.adapters.hashing.bcrypt_hasher import MAX_SECRET_BYTES
from credgate.domain.exceptions import ValidationError
from credgate.domain.models import Credential

FIELD_ORDER = ("name", "email", "password", "confirmPassword")

FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "password": "Password",
    "confirmPassword": "Confirm password",
}

RULE_MESSAGES = {
    "name": "Name must be at least 2 characters",
    "email": "Invalid email address",
    "password": "Password must be at least 8 characters",
    "confirmPassword": "Passwords don't match",
}

PASSWORD_TOO_LONG_MESSAGE = f"Password must be at most {MAX_SECRET_BYTES} bytes"


def _reject_display_name(value: object) -> object:
    # EmailStr accepts "Name <addr>" and keeps only addr
    if isinstance(value, str) and ("<" in value or ">" in value):
        raise ValueError("display-name form is not an email address")
    return value


def _within_hasher_limit(value: str) -> str:
    if len(value.encode()) > MAX_SECRET_BYTES:
        raise PydanticCustomError("password_too_long", PASSWORD_TOO_LONG_MESSAGE)
    return value


class CredentialModel(BaseModel):
    """Server-side credential shape. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=2)
    email: Annotated[EmailStr, BeforeValidator(_reject_display_name)]
    password: Annotated[str, Field(min_length=8), AfterValidator(_within_hasher_limit)]


class PydanticCredentialValidator:
    """
    Implements CredentialValidator protocol via pydantic.

    With require_confirmation=True it also applies the client-side rule that
    confirmPassword equals password; the mismatch is reported against
    confirmPassword only.
    """

    def __init__(self, require_confirmation: bool = False) -> None:
        self._require_confirmation = require_confirmation

    def validate(self, raw: object) -> Credential:
        """
        Validate a raw payload.

        Args:
            raw: Anything; non-mapping input is treated as an empty submission

        Returns:
            Validated Credential (email not yet normalized)

        Raises:
            ValidationError: With ordered per-field messages
        """
        data = dict(raw) if isinstance(raw, Mapping) else {}
        errors: dict[str, str] = {}
        model: CredentialModel | None = None

        try:
            model = CredentialModel.model_validate(data)
        except PydanticValidationError as exc:
            for error in exc.errors():
                field = str(error["loc"][0]) if error["loc"] else ""
                if field not in RULE_MESSAGES or field in errors:
                    continue
                errors[field] = _message_for(field, error["type"])

        if self._require_confirmation:
            confirm = data.get("confirmPassword")
            if confirm is None:
                errors["confirmPassword"] = _message_for("confirmPassword", "missing")
            elif confirm != data.get("password"):
                errors["confirmPassword"] = RULE_MESSAGES["confirmPassword"]

        if errors or model is None:
            raise ValidationError({f: errors[f] for f in FIELD_ORDER if f in errors})

        return Credential(name=model.name, email=str(model.email), password=model.password)


def _message_for(field: str, error_type: str) -> str:
    if error_type == "missing":
        return f"{FIELD_LABELS[field]} is required"
    if error_type == "password_too_long":
        return PASSWORD_TOO_LONG_MESSAGE
    return RULE_MESSAGES[field]
