"""Core configuration and error types."""

from slsinit.core.config import InstallConfig, SetupConfig, TemplateConfig
from slsinit.core.errors import SetupError, SetupErrorKind, TemplateFetchError

__all__ = [
    "InstallConfig",
    "SetupConfig",
    "SetupError",
    "SetupErrorKind",
    "TemplateConfig",
    "TemplateFetchError",
]
