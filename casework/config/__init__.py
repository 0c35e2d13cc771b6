"""Configuration for Casework."""

from casework.config.casework_config import (
    DEFAULT_CASEWORK_CONFIG,
    SUPPORTED_LOCALES,
    TEST_CASEWORK_CONFIG,
    CaseworkConfig,
)

__all__: list[str] = [
    "DEFAULT_CASEWORK_CONFIG",
    "SUPPORTED_LOCALES",
    "TEST_CASEWORK_CONFIG",
    "CaseworkConfig",
]
