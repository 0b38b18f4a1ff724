"""Waitlist data models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class WaitlistEntry(BaseModel):
    """One waitlist signup.

    Persisted with camelCase keys (``referralCode``, ``createdAt`` ...) so the
    stored slot keeps the same shape as the browser demo it replaces.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    email: str
    referral_code: str
    referred_by: str | None = None
    referral_count: int = Field(default=0, ge=0)
    position: int = Field(ge=1)
    created_at: datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<WaitlistEntry(position={self.position}, email='{self.email}', code={self.referral_code})>"


# Validator/serializer for the whole entries slot
EntryList = TypeAdapter(list[WaitlistEntry])


def dump_entries(entries: list[WaitlistEntry]) -> str:
    """Serialize entries to the JSON text stored in the entries slot."""
    return EntryList.dump_json(entries, by_alias=True).decode("utf-8")


def load_entries(raw: str) -> list[WaitlistEntry]:
    """Parse the entries slot.

    Raises:
        pydantic.ValidationError: if the text is not a valid entries array
    """
    return EntryList.validate_json(raw)
