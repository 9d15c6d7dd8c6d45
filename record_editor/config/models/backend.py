"""Backend service configuration."""

from pydantic import BaseModel, Field


class BackendConfig(BaseModel):
    """Where the record-keeping service lives and how to talk to it."""

    base_url: str = Field(
        default="http://localhost:8888/bank",
        description="Base URL of the bank service, including the /bank prefix",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers sent with every request",
    )
