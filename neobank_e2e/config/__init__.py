"""Suite configuration schema and loader."""

from neobank_e2e.config.settings import (
    CredentialsConfig,
    SelectorConfig,
    SuiteSettings,
    TimeoutConfig,
    get_default_settings,
    load_settings,
)

__all__ = [
    "CredentialsConfig",
    "get_default_settings",
    "load_settings",
    "SelectorConfig",
    "SuiteSettings",
    "TimeoutConfig",
]
