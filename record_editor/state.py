"""Pure state transitions for the record editor.

Each function takes the current EditorState and returns a new one. Nothing
here performs I/O; the sync controller awaits the backend first and then
applies the matching transition to whatever state is current at that point.
"""

from collections.abc import Iterable
from typing import Any

from record_editor.models import EditorState, FormState, Record


def set_field(state: EditorState, name: str, value: str) -> EditorState:
    """Update one form field.

    Errors from the previous validation pass are left in place until the
    next submit.
    """
    return state.model_copy(update={"form": state.form.with_field(name, value)})


def start_edit(state: EditorState, record: Record) -> EditorState:
    """Idle -> Editing: load the record's values into the form."""
    return state.model_copy(
        update={"editing": record, "form": FormState.from_record(record)}
    )


def apply_validation(state: EditorState, errors: dict[str, str]) -> EditorState:
    return state.model_copy(update={"errors": dict(errors)})


def records_loaded(state: EditorState, records: Iterable[Record]) -> EditorState:
    """Replace the record list with the server's copy."""
    return state.model_copy(update={"records": tuple(records)})


def record_created(state: EditorState, record: Record) -> EditorState:
    """Append the created record and clear the form."""
    return state.model_copy(
        update={
            "records": (*state.records, record),
            "form": FormState(),
            "errors": {},
        }
    )


def record_updated(
    state: EditorState,
    records: Iterable[Record] | None = None,
) -> EditorState:
    """Editing -> Idle after a confirmed update.

    Args:
        state: Current state
        records: Freshly fetched list, or None if the re-fetch failed and the
            cached list has to stay
    """
    update: dict[str, Any] = {"editing": None, "form": FormState(), "errors": {}}
    if records is not None:
        update["records"] = tuple(records)
    return state.model_copy(update=update)


def record_deleted(state: EditorState, record_id: Any) -> EditorState:
    """Drop every record with the given id."""
    return state.model_copy(
        update={"records": tuple(r for r in state.records if r.id != record_id)}
    )
