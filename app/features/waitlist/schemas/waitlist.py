import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from app.platform.exceptions import SubmissionInvalid

# Only the landing page constrains spend focus to these identifiers
SPEND_FOCUS_OPTIONS = ("travel", "dining", "gas", "rent", "everyday", "other")

NOTES_MAX_LENGTH = 1000

# Bare local@domain.tld, no display name, no whitespace
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*"
    r"\.[A-Za-z]{2,}$"
)


class NotificationOutcome(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class PersistenceOutcome(str, Enum):
    SYNCED = "synced"
    SKIPPED = "skipped"
    FAILED = "failed"


class SignupSubmission(BaseModel):
    """A validated waitlist join request, keyed by the form's camelCase names on the wire."""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field("", alias="fullName", validate_default=True)
    email: str = Field("", validate_default=True)
    spend_focus: str = Field("", alias="spendFocus", validate_default=True)
    notes: Optional[str] = None
    opt_in: bool = Field(False, alias="optIn", validate_default=True)

    @field_validator("full_name", mode="before")
    @classmethod
    def validate_full_name(cls, value: Any) -> str:
        if not isinstance(value, str) or len(value.strip()) < 2:
            raise PydanticCustomError("full_name", "Full name is required.")
        return value.strip()

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_shape(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("email", "Enter a valid email address.")
        email = value.strip()
        if not EMAIL_PATTERN.match(email):
            raise PydanticCustomError("email", "Enter a valid email address.")
        return email

    @field_validator("spend_focus", mode="before")
    @classmethod
    def validate_spend_focus(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("spend_focus", "Let us know your optimisation focus.")
        return value.strip()

    @field_validator("notes", mode="before")
    @classmethod
    def validate_notes(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        if not isinstance(value, str) or len(value) > NOTES_MAX_LENGTH:
            raise PydanticCustomError("notes", "Notes must be 1000 characters or fewer.")
        return value

    @field_validator("opt_in", mode="before")
    @classmethod
    def validate_opt_in(cls, value: Any) -> bool:
        # The form posts either a JSON boolean or the checkbox string
        if value is True or value == "true":
            return True
        raise PydanticCustomError("opt_in", "Please confirm you want to receive updates.")


def _wire_name(field: Any) -> str:
    info = SignupSubmission.model_fields.get(field)
    if info is not None and info.alias:
        return info.alias
    return str(field)


def validate_submission(raw: Any) -> SignupSubmission:
    """
    Build a SignupSubmission from a decoded request body.

    Every field is checked; the first message per field is reported in a
    SubmissionInvalid error.
    """
    if not isinstance(raw, dict):
        raw = {}
    try:
        return SignupSubmission.model_validate(raw)
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = _wire_name(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(field, error["msg"])
        raise SubmissionInvalid(errors)


class SignupRecord(BaseModel):
    """Row written to the signups table."""

    full_name: str
    email: str
    spend_focus: str
    notes: str = ""
    opt_in: bool
    joined_at: datetime

    @classmethod
    def from_submission(cls, submission: SignupSubmission, joined_at: datetime) -> "SignupRecord":
        return cls(
            full_name=submission.full_name,
            email=submission.email,
            spend_focus=submission.spend_focus,
            notes=submission.notes or "",
            opt_in=submission.opt_in,
            joined_at=joined_at,
        )


class WaitlistResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    email_result: NotificationOutcome = Field(NotificationOutcome.SKIPPED, alias="emailResult")
    sms_result: NotificationOutcome = Field(NotificationOutcome.SKIPPED, alias="smsResult")
    supabase_result: PersistenceOutcome = Field(PersistenceOutcome.SKIPPED, alias="supabaseResult")
    alert_result: NotificationOutcome = Field(NotificationOutcome.SKIPPED, alias="alertResult")

    def outcomes(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True, exclude={"message"})


class WaitlistStats(BaseModel):
    count: int
