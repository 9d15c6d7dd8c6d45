"""Bank service API client.

Thin async wrapper over the four REST endpoints of the record-keeping
service.

Usage:
    from record_editor.client import BankClient

    async with BankClient("http://localhost:8888/bank") as client:
        records = await client.list_records()
"""

from typing import Any

import httpx
from pydantic import ValidationError

from record_editor.config.models.backend import BackendConfig
from record_editor.exceptions import TransportError
from record_editor.models import Record, RecordFields
from record_editor.observability.logging import get_logger

logger = get_logger(__name__)


class BankClient:
    """Async client for the bank service.

    Attributes:
        base_url: Base URL of the service, including the /bank prefix
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8888/bank",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the bank service
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json", **(headers or {})},
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: BackendConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BankClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=config.headers,
            transport=transport,
        )

    async def __aenter__(self) -> "BankClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> Any:
        """Make an API request and return the decoded JSON body (None if empty)."""
        try:
            response = await self._client.request(method=method, url=path, json=json)
        except httpx.HTTPError as exc:
            raise TransportError(
                message=f"{method} {path} failed: {exc}",
                details=type(exc).__name__,
            ) from exc

        if not response.is_success:
            try:
                details = response.json()
            except ValueError:
                details = None
            raise TransportError(
                message=f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                details=details if details is not None else response.text,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                message=f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
                details=response.text,
            ) from exc

    @staticmethod
    def _parse_record(data: Any, operation: str) -> Record:
        try:
            return Record.model_validate(data)
        except ValidationError as exc:
            raise TransportError(
                message=f"{operation} returned an invalid record",
                details=exc.errors(include_url=False),
            ) from exc

    async def list_records(self) -> list[Record]:
        """Fetch every record."""
        data = await self._request("GET", "/read")
        if not isinstance(data, list):
            raise TransportError(
                message="GET /read did not return a list",
                details=data,
            )
        records = [self._parse_record(item, "GET /read") for item in data]
        logger.debug("records_fetched", count=len(records))
        return records

    async def create_record(self, fields: RecordFields) -> Record:
        """Create a record; the service assigns its id."""
        data = await self._request("POST", "/add", json=fields.model_dump(mode="json"))
        return self._parse_record(data, "POST /add")

    async def update_record(self, record_id: int | str, record: Record) -> Any:
        """Replace a record.

        Returns the raw response body; callers re-fetch the list instead of
        trusting it.
        """
        return await self._request(
            "PUT",
            f"/update/{record_id}",
            json=record.model_dump(mode="json"),
        )

    async def delete_record(self, record_id: int | str) -> None:
        """Delete a record."""
        await self._request("DELETE", f"/delete/{record_id}")
