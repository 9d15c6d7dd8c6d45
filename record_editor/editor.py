"""RecordEditor: form state, validation and backend synchronization.

The editor owns an immutable EditorState. User input goes through
set_field() and start_edit(); submit() validates and dispatches to create()
or update() depending on the edit mode. Every backend call is awaited and
its outcome captured as a SyncResult before the matching pure transition
from record_editor.state is applied to the state current at that moment.

Overlapping operations are neither serialized nor cancelled, so responses
may be applied out of submission order.

Usage:
    async with RecordEditor.from_settings() as editor:
        editor.set_field("name", "Ada")
        ...
        result = await editor.submit()
        if not result.ok:
            print(editor.state.errors)
"""

import time
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

import httpx

from record_editor import state as transitions
from record_editor.client import BankClient
from record_editor.config import Settings, get_settings
from record_editor.exceptions import TransportError
from record_editor.models import EditorState, FormState, Record, RecordFields
from record_editor.observability.logging import get_logger, setup_logging
from record_editor.observability.metrics import record_sync
from record_editor.validation import validate

logger = get_logger(__name__)

T = TypeVar("T")


class SyncStatus(str, Enum):
    """Outcome of a sync operation."""

    OK = "ok"
    INVALID = "invalid"
    FAILED = "failed"


@dataclass
class SyncResult:
    """Result-or-error value of one editor operation.

    INVALID carries the field errors and means the backend was not called.
    FAILED carries the TransportError; local state was left as it was.
    """

    operation: str
    status: SyncStatus
    errors: dict[str, str] = field(default_factory=dict)
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.status == SyncStatus.OK


class RecordEditor:
    """Single-page customer editor synchronized with the bank service."""

    def __init__(
        self,
        client: BankClient,
        state: EditorState | None = None,
        metrics_enabled: bool = True,
    ) -> None:
        self._client = client
        self._state = state or EditorState()
        self._metrics_enabled = metrics_enabled

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "RecordEditor":
        """Build an editor from configuration and set up logging.

        Args:
            settings: Settings to use; loaded with get_settings() if omitted
            transport: Custom httpx transport (used by tests)
        """
        settings = settings or get_settings()
        log_config = settings.observability.logging
        setup_logging(
            level=log_config.level,
            format=log_config.format,
            redact_pii=log_config.redact_pii,
        )
        return cls(
            client=BankClient.from_config(settings.backend, transport=transport),
            metrics_enabled=settings.observability.metrics.enabled,
        )

    async def __aenter__(self) -> "RecordEditor":
        await self.activate()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    @property
    def state(self) -> EditorState:
        return self._state

    async def activate(self) -> SyncResult:
        """Initial list load when the editor is first shown."""
        return await self.load_all()

    # Form state

    def set_field(self, name: str, value: str) -> EditorState:
        self._state = transitions.set_field(self._state, name, value)
        return self._state

    def start_edit(self, record: Record) -> EditorState:
        """Enter the editing session for a record."""
        self._state = transitions.start_edit(self._state, record)
        logger.info("record_edit_started", record_id=record.id)
        return self._state

    # Sync operations

    async def load_all(self) -> SyncResult:
        """Replace the record list with the server's; keep the stale list on failure."""
        records, error = await self._call("read", self._client.list_records())
        if error is not None:
            logger.error(
                "records_load_failed",
                error=error.message,
                status_code=error.status_code,
            )
            return SyncResult("load_all", SyncStatus.FAILED, error=error)

        self._state = transitions.records_loaded(self._state, records)
        logger.info("records_loaded", count=len(records))
        return SyncResult("load_all", SyncStatus.OK)

    async def create(self, fields: FormState | Mapping[str, str] | None = None) -> SyncResult:
        """Validate and send a new record.

        Args:
            fields: Values to create from; defaults to the current form
        """
        form = self._resolve_form(fields)
        errors = self._validate("create", form)
        if errors:
            return SyncResult("create", SyncStatus.INVALID, errors=errors)

        record, error = await self._call(
            "add", self._client.create_record(RecordFields.from_form(form))
        )
        if error is not None:
            logger.error(
                "record_create_failed",
                error=error.message,
                status_code=error.status_code,
            )
            return SyncResult("create", SyncStatus.FAILED, error=error)

        self._state = transitions.record_created(self._state, record)
        logger.info("record_created", record_id=record.id, count=len(self._state.records))
        return SyncResult("create", SyncStatus.OK)

    async def update(
        self,
        record_id: int | str,
        fields: FormState | Mapping[str, str] | None = None,
    ) -> SyncResult:
        """Validate and send a full record, then re-fetch the list.

        The service may recompute fields on update, so its list is taken as
        authoritative instead of merging the edited record locally. The edit
        session ends once the update is confirmed, even if the re-fetch fails.
        """
        form = self._resolve_form(fields)
        errors = self._validate("update", form)
        if errors:
            return SyncResult("update", SyncStatus.INVALID, errors=errors)

        payload = self._build_update(record_id, form)
        _, error = await self._call("update", self._client.update_record(record_id, payload))
        if error is not None:
            logger.error(
                "record_update_failed",
                record_id=record_id,
                error=error.message,
                status_code=error.status_code,
            )
            return SyncResult("update", SyncStatus.FAILED, error=error)

        records, refresh_error = await self._call("read", self._client.list_records())
        if refresh_error is not None:
            logger.error(
                "records_refresh_failed",
                record_id=record_id,
                error=refresh_error.message,
                status_code=refresh_error.status_code,
            )

        self._state = transitions.record_updated(self._state, records)
        logger.info("record_updated", record_id=record_id)
        return SyncResult("update", SyncStatus.OK)

    async def delete(self, record_id: int | str) -> SyncResult:
        """Delete a record and drop it from the list once the server confirms."""
        _, error = await self._call("delete", self._client.delete_record(record_id))
        if error is not None:
            logger.error(
                "record_delete_failed",
                record_id=record_id,
                error=error.message,
                status_code=error.status_code,
            )
            return SyncResult("delete", SyncStatus.FAILED, error=error)

        self._state = transitions.record_deleted(self._state, record_id)
        logger.info("record_deleted", record_id=record_id, count=len(self._state.records))
        return SyncResult("delete", SyncStatus.OK)

    async def submit(self) -> SyncResult:
        """The save action: update while editing, create otherwise."""
        editing = self._state.editing
        if editing is not None:
            return await self.update(editing.id)
        return await self.create()

    # Helpers

    def _resolve_form(self, fields: FormState | Mapping[str, str] | None) -> FormState:
        if fields is None:
            return self._state.form
        if isinstance(fields, FormState):
            return fields
        return FormState.model_validate(dict(fields))

    def _validate(self, operation: str, form: FormState) -> dict[str, str]:
        errors = validate(form)
        self._state = transitions.apply_validation(self._state, errors)
        if errors:
            self._observe(operation, SyncStatus.INVALID)
        return errors

    def _build_update(self, record_id: int | str, form: FormState) -> Record:
        """Overlay the form onto the cached record so server-only fields survive."""
        editing = self._state.editing
        if editing is not None and editing.id == record_id:
            base = editing
        else:
            base = self._state.find(record_id)

        data: dict[str, Any] = base.model_dump() if base is not None else {}
        data.update(RecordFields.from_form(form).model_dump())
        data["id"] = record_id
        return Record.model_validate(data)

    async def _call(
        self,
        operation: str,
        call: Awaitable[T],
    ) -> tuple[T | None, TransportError | None]:
        started = time.perf_counter()
        try:
            value = await call
        except TransportError as exc:
            self._observe(operation, SyncStatus.FAILED, time.perf_counter() - started)
            return None, exc
        self._observe(operation, SyncStatus.OK, time.perf_counter() - started)
        return value, None

    def _observe(self, operation: str, status: SyncStatus, latency: float | None = None) -> None:
        if self._metrics_enabled:
            record_sync(operation, status.value, latency)
