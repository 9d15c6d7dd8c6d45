"""record-editor: customer form and list kept in sync with a bank service.

Usage:
    from record_editor import RecordEditor

    async with RecordEditor.from_settings() as editor:
        editor.set_field("name", "Ada Lovelace")
        editor.set_field("username", "ada")
        editor.set_field("email", "ada@example.com")
        editor.set_field("phone", "5551234567")
        editor.set_field("balance", "250")
        result = await editor.submit()
"""

from record_editor.editor import RecordEditor, SyncResult, SyncStatus
from record_editor.exceptions import RecordEditorError, TransportError, UnknownFieldError
from record_editor.models import EditMode, EditorState, FormState, Record, RecordFields
from record_editor.validation import validate

__all__ = [
    "EditMode",
    "EditorState",
    "FormState",
    "Record",
    "RecordEditor",
    "RecordEditorError",
    "RecordFields",
    "SyncResult",
    "SyncStatus",
    "TransportError",
    "UnknownFieldError",
    "validate",
]
