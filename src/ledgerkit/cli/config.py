"""CLI configuration with XDG-compliant paths and environment variable overrides."""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path

from ledgerkit.config import LedgerConfig

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def _default_config_dir() -> Path:
    """Get XDG-compliant config directory.

    Uses XDG_CONFIG_HOME if set, otherwise ~/.config/ledgerkit.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "ledgerkit"
    return Path.home() / ".config" / "ledgerkit"


@dataclass
class CLIConfig:
    """Configuration passed through Typer context.

    Attributes:
        journal_path: Journal given on the command line (or LEDGER_FILE).
        verbose: Enable verbose output.
        config_dir: Directory holding config.json.

    Directory Structure:
        config_dir/
        └── config.json        # LedgerConfig settings
    """

    journal_path: Path | None = None
    verbose: bool = False
    config_dir: Path = field(default_factory=_default_config_dir)

    @property
    def settings_path(self) -> Path:
        return self.config_dir / "config.json"

    def load_settings(self) -> LedgerConfig:
        """Load settings from config.json with command-line and environment overrides.

        Loading priority:
        1. config.json in the config directory (missing file = defaults)
        2. LEDGER_FILE / LEDGERKIT_* environment variables
        3. --file on the command line

        Raises:
            ValueError: If the config file or environment holds invalid values
        """
        settings = LedgerConfig()

        if self.settings_path.exists():
            try:
                settings = LedgerConfig.from_file(self.settings_path)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Failed to read %s: %s", self.settings_path, e)

        env = LedgerConfig.from_env()
        if env.journal_path is not None:
            settings = replace(settings, journal_path=env.journal_path)
        if "LEDGERKIT_DATE_FORMAT" in os.environ:
            settings = replace(settings, date_format=env.date_format)
        if "LEDGERKIT_AMOUNT_ALIGNMENT" in os.environ:
            settings = replace(settings, amount_alignment=env.amount_alignment)

        if self.journal_path is not None:
            settings = replace(settings, journal_path=self.journal_path)

        return settings

    def resolve_journal(self) -> Path:
        """Return the journal path to operate on.

        Raises:
            ValueError: If no journal was configured anywhere
        """
        journal = self.load_settings().journal_path
        if journal is None:
            msg = (
                "No journal file. Pass --file, set LEDGER_FILE, "
                f"or add journal_path to {self.settings_path}"
            )
            raise ValueError(msg)
        return journal
