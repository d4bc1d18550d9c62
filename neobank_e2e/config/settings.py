"""
Pydantic settings for the NeoBank suite.

Settings come from three layers, later layers winning: model defaults, an
optional YAML file, then NEOBANK_* environment variables. Selectors live in
configuration so a deployment with different markup can be targeted without
touching the page object.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NEOBANK_CONFIG"


class CredentialsConfig(BaseModel):
    """Demo account credentials."""

    model_config = {"extra": "forbid"}

    username: str = "admin"
    password: str = "password123"


class TimeoutConfig(BaseModel):
    """Wait bounds, in milliseconds."""

    model_config = {"extra": "forbid"}

    action_ms: int = Field(default=5000, gt=0, description="Upper bound for a UI state change")
    navigation_ms: int = Field(default=10000, gt=0, description="Upper bound for page navigation")
    dialog_ms: int = Field(default=3000, gt=0, description="Upper bound for a dialog sequence")
    poll_interval_ms: int = Field(default=50, gt=0, description="Delay between condition checks")


class SelectorConfig(BaseModel):
    """Element identifiers of the banking UI."""

    model_config = {"extra": "forbid"}

    # Login page
    username_input: str = "#username"
    password_input: str = "#password"
    login_button: str = "#login-btn"
    login_form: str = "#login-form"
    login_error: str = "#error-msg"

    # Dashboard header
    logout_button: str = "#logout-btn"
    welcome_heading: str = "h2"
    user_name: str = "#user-name"
    account_number: str = "#account-number"
    balance_card: str = ".balance-card"
    balance_amount: str = ".amount"
    check_balance_button: str = "#check-balance-btn"
    balance_display: str = "#balance-display"

    # Deposit / debit
    deposit_input: str = "#deposit-amount"
    deposit_button: str = "#deposit-btn"
    deposit_status: str = "#deposit-status"
    debit_input: str = "#debit-amount"
    debit_button: str = "#debit-btn"
    debit_status: str = "#debit-status"

    # Transactions
    transaction_list: str = "#transaction-list"
    transaction_items: str = "#transaction-list li"

    # Beneficiaries
    beneficiary_name_input: str = "#beneficiary-name"
    beneficiary_account_input: str = "#beneficiary-account"
    beneficiary_bank_input: str = "#beneficiary-bank"
    add_beneficiary_button: str = "#add-beneficiary-btn"
    beneficiary_status: str = "#beneficiary-status"
    beneficiary_list: str = "#beneficiary-list"
    beneficiary_items: str = "#beneficiary-list li"
    beneficiary_info: str = ".beneficiary-info"
    edit_button: str = ".edit-btn"
    delete_button: str = ".delete-btn"

    def edit_button_for(self, beneficiary_id: int | str) -> str:
        return f'{self.edit_button}[data-id="{beneficiary_id}"]'

    def delete_button_for(self, beneficiary_id: int | str) -> str:
        return f'{self.delete_button}[data-id="{beneficiary_id}"]'


class SuiteSettings(BaseModel):
    """Top-level settings for the interaction layer and the runner."""

    model_config = {"extra": "forbid"}

    base_url: str | None = Field(
        default=None,
        description="Root URL of the banking UI; None means paths are resolved by the browser context",
    )
    login_path: str = "/"
    dashboard_url_fragment: str = "dashboard.html"
    login_url_fragment: str = "index.html"
    headless: bool = True
    browser: str = "chromium"
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    selectors: SelectorConfig = Field(default_factory=SelectorConfig)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value.rstrip("/") or None

    @field_validator("browser")
    @classmethod
    def _known_browser(cls, value: str) -> str:
        if value not in ("chromium", "firefox", "webkit"):
            raise ValueError(f"Unsupported browser: {value}")
        return value

    def url_for(self, path: str) -> str:
        """Absolute URL for path when base_url is set, otherwise the path itself."""
        if not self.base_url:
            return path
        return urljoin(f"{self.base_url}/", path.lstrip("/"))


def _env_overrides(environ: dict[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if environ.get("NEOBANK_BASE_URL"):
        overrides["base_url"] = environ["NEOBANK_BASE_URL"]
    if environ.get("NEOBANK_BROWSER"):
        overrides["browser"] = environ["NEOBANK_BROWSER"]
    if environ.get("NEOBANK_HEADLESS"):
        overrides["headless"] = environ["NEOBANK_HEADLESS"].lower() in ("true", "1", "yes")

    credentials = {}
    if environ.get("NEOBANK_USERNAME"):
        credentials["username"] = environ["NEOBANK_USERNAME"]
    if environ.get("NEOBANK_PASSWORD"):
        credentials["password"] = environ["NEOBANK_PASSWORD"]
    if credentials:
        overrides["credentials"] = credentials

    if environ.get("NEOBANK_TIMEOUT_MS"):
        overrides["timeouts"] = {"action_ms": int(environ["NEOBANK_TIMEOUT_MS"])}
    return overrides


def _merge(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(
    config_path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> SuiteSettings:
    """
    Build SuiteSettings from an optional YAML file and NEOBANK_* variables.

    Args:
        config_path: YAML file; falls back to $NEOBANK_CONFIG when omitted
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated SuiteSettings

    Raises:
        FileNotFoundError: If an explicitly named config file does not exist
        pydantic.ValidationError: If the merged values are invalid
    """
    environ = dict(os.environ if environ is None else environ)
    path = config_path or environ.get(CONFIG_ENV_VAR)

    raw: dict[str, Any] = {}
    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(raw).__name__}")
        logger.debug(f"Loaded settings from {path}")

    return SuiteSettings.model_validate(_merge(raw, _env_overrides(environ)))


@lru_cache(maxsize=1)
def get_default_settings() -> SuiteSettings:
    """Return settings loaded once from the default YAML and environment."""
    return load_settings()
