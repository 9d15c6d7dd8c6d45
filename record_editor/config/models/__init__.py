"""Configuration model exports.

    from record_editor.config.models import BackendConfig, ObservabilityConfig
"""

from record_editor.config.models.backend import BackendConfig
from record_editor.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)

__all__ = [
    "BackendConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
]
