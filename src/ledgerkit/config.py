"""Configuration management for ledgerkit."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from ledgerkit.journal.writer import DateFormat, JournalWriter
from ledgerkit.numeric import DEFAULT_PRECISION, DecimalConfig


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "ledgerkit"
    return Path.home() / ".config" / "ledgerkit"


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Journal location and formatting settings."""

    journal_path: Path | None = None
    date_format: DateFormat = DateFormat.SLASH
    amount_alignment: int = 50
    indent_size: int = 2
    decimal_precision: int = DEFAULT_PRECISION

    def writer(self) -> JournalWriter:
        """Build a JournalWriter with these settings."""
        return JournalWriter(
            date_format=self.date_format,
            amount_alignment=self.amount_alignment,
            indent_size=self.indent_size,
        )

    def decimal_config(self) -> DecimalConfig:
        return DecimalConfig(precision=self.decimal_precision)

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables.

        Recognised env vars:
        - LEDGER_FILE: journal path (same variable ledger-cli uses)
        - LEDGERKIT_DATE_FORMAT: "slash" or "dash"
        - LEDGERKIT_AMOUNT_ALIGNMENT: column amounts are aligned to
        """
        journal = os.environ.get("LEDGER_FILE")
        date_format = os.environ.get("LEDGERKIT_DATE_FORMAT", DateFormat.SLASH)
        alignment = os.environ.get("LEDGERKIT_AMOUNT_ALIGNMENT")

        try:
            return cls(
                journal_path=Path(journal).expanduser() if journal else None,
                date_format=DateFormat(date_format),
                amount_alignment=int(alignment) if alignment else 50,
            )
        except ValueError as e:
            msg = f"Invalid ledgerkit environment configuration: {e}"
            raise ValueError(msg) from e

    @classmethod
    def from_file(cls, path: Path | None = None) -> "LedgerConfig":
        """Load config from JSON file.

        Default path: ~/.config/ledgerkit/config.json. A missing default file
        yields the defaults.

        Expected format:
        {
            "journal_path": "~/finance/main.journal",
            "date_format": "slash",
            "amount_alignment": 50,
            "indent_size": 2,
            "decimal_precision": 20
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"
            if not path.exists():
                return cls()

        with path.open() as f:
            data = json.load(f)

        journal = data.get("journal_path")
        return cls(
            journal_path=Path(journal).expanduser() if journal else None,
            date_format=DateFormat(data.get("date_format", DateFormat.SLASH)),
            amount_alignment=int(data.get("amount_alignment", 50)),
            indent_size=int(data.get("indent_size", 2)),
            decimal_precision=int(data.get("decimal_precision", DEFAULT_PRECISION)),
        )
