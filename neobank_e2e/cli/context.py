"""CLI context and logging setup."""

import logging
import os
from typing import Optional

from neobank_e2e.config.settings import SuiteSettings, load_settings


class CLIContext:
    """Options shared by every command."""

    def __init__(self):
        self.config_file: Optional[str] = os.getenv("NEOBANK_CONFIG")
        self.debug = False
        self._settings: Optional[SuiteSettings] = None

    @property
    def settings(self) -> SuiteSettings:
        if self._settings is None:
            self._settings = load_settings(self.config_file)
        return self._settings


def setup_logging(debug: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
