"""Data models for the record editor.

Record and RecordFields mirror the bank service's wire format. FormState
and EditorState are the immutable client-side state that the transition
functions in record_editor.state operate on.
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from record_editor.exceptions import UnknownFieldError

FIELD_NAMES: tuple[str, ...] = ("name", "username", "email", "phone", "balance")


def format_balance(value: Decimal | None) -> str:
    """Render a balance exactly as the service stored it ("10.50" stays "10.50")."""
    if value is None:
        return ""
    return format(value, "f")


def balance_to_json(value: Decimal | None) -> int | float | None:
    """Balances go over the wire as JSON numbers; integral ones stay exact."""
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class EditMode(str, Enum):
    """Edit-session states."""

    IDLE = "idle"
    EDITING = "editing"


class Record(BaseModel):
    """A customer account as stored by the bank service.

    Fields the service adds beyond the editable ones are kept, since an
    update sends the whole record back. Missing or null values are shown as
    empty form fields rather than rejecting the whole list.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: int | str
    name: str = ""
    username: str = ""
    email: str = ""
    phone: str = ""
    balance: Decimal | None = None

    @field_validator("name", "username", "email", "phone", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_serializer("balance", when_used="json")
    def _serialize_balance(self, value: Decimal | None) -> int | float | None:
        return balance_to_json(value)


class RecordFields(BaseModel):
    """The editable part of a record, as sent to the service."""

    name: str
    username: str
    email: str
    phone: str
    balance: Decimal

    @field_serializer("balance", when_used="json")
    def _serialize_balance(self, value: Decimal) -> int | float | None:
        return balance_to_json(value)

    @classmethod
    def from_form(cls, form: "FormState") -> "RecordFields":
        """Convert a validated form into wire fields.

        The form must have passed validation; the balance string is parsed
        as a Decimal so the typed digits are kept.
        """
        return cls(
            name=form.name,
            username=form.username,
            email=form.email,
            phone=form.phone,
            balance=Decimal(form.balance.strip()),
        )


class FormState(BaseModel):
    """Draft values bound to the on-screen form, all kept as strings."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    username: str = ""
    email: str = ""
    phone: str = ""
    balance: str = ""

    @classmethod
    def from_record(cls, record: Record) -> "FormState":
        return cls(
            name=record.name,
            username=record.username,
            email=record.email,
            phone=record.phone,
            balance=format_balance(record.balance),
        )

    def with_field(self, name: str, value: str) -> "FormState":
        if name not in FIELD_NAMES:
            raise UnknownFieldError(name)
        return self.model_copy(update={name: value})

    def as_fields(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in FIELD_NAMES}

    @property
    def is_empty(self) -> bool:
        return not any(self.as_fields().values())


class EditorState(BaseModel):
    """Everything the editor renders: form, inline errors, list, edit target."""

    model_config = ConfigDict(frozen=True)

    form: FormState = Field(default_factory=FormState)
    errors: dict[str, str] = Field(default_factory=dict)
    records: tuple[Record, ...] = ()
    editing: Record | None = None

    @property
    def mode(self) -> EditMode:
        return EditMode.EDITING if self.editing is not None else EditMode.IDLE

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def submit_label(self) -> str:
        """Caption of the single save button."""
        return "Update" if self.is_editing else "Add"

    def find(self, record_id: Any) -> Record | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None
