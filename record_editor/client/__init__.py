"""Bank service client.

Usage:
    from record_editor.client import BankClient
    from record_editor.models import RecordFields

    async with BankClient("http://localhost:8888/bank") as client:
        record = await client.create_record(
            RecordFields(
                name="Ada",
                username="ada",
                email="ada@example.com",
                phone="5551234567",
                balance=120.0,
            )
        )
        await client.delete_record(record.id)
"""

from record_editor.client.client import BankClient
from record_editor.exceptions import TransportError

__all__ = ["BankClient", "TransportError"]
