"""Startup configuration of the shell."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from btcli.errors import ConfigError
from btcli.log import DEFAULT_LEVEL

BTCLI_PROJECT = "BTCLI_PROJECT"
BTCLI_INSTANCE = "BTCLI_INSTANCE"
BTCLI_TABLES = "BTCLI_TABLES"
BTCLI_HISTORY = "BTCLI_HISTORY"
BTCLI_LOG_LEVEL = "BTCLI_LOG_LEVEL"

DEFAULT_HISTORY = Path.home() / ".btcli_history"


@dataclass(frozen=True)
class ShellConfig:
    """Settings fixed for the life of the process."""

    project: str = ""
    instance: str = ""
    tables: tuple[str, ...] = ()  # Completion candidates; empty asks the store
    history_file: Path = DEFAULT_HISTORY
    log_level: str = DEFAULT_LEVEL

    def require_connection(self) -> None:
        """Raise ``ConfigError`` unless a project and an instance are set."""
        missing = [name for name in ("project", "instance") if not getattr(self, name)]
        if missing:
            raise ConfigError(f"missing {' and '.join(missing)} (use --{missing[0]} or ${_ENV_NAMES[missing[0]]})")


_ENV_NAMES = {"project": BTCLI_PROJECT, "instance": BTCLI_INSTANCE}


def _env_or_none(environ: Mapping[str, str], name: str) -> str | None:
    value = (environ.get(name) or "").strip()
    return value or None


def split_tables(raw: str | None) -> tuple[str, ...]:
    """Split a comma separated list of table names."""
    if not raw:
        return ()
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    project: str | None = None,
    instance: str | None = None,
    tables: str | None = None,
    history_file: Path | None = None,
    log_level: str | None = None,
) -> ShellConfig:
    """Build the configuration from explicit values over environment defaults."""
    env = os.environ if environ is None else environ
    history = history_file or _env_or_none(env, BTCLI_HISTORY)
    return ShellConfig(
        project=project or _env_or_none(env, BTCLI_PROJECT) or "",
        instance=instance or _env_or_none(env, BTCLI_INSTANCE) or "",
        tables=split_tables(tables if tables is not None else _env_or_none(env, BTCLI_TABLES)),
        history_file=Path(history) if history else DEFAULT_HISTORY,
        log_level=log_level or _env_or_none(env, BTCLI_LOG_LEVEL) or DEFAULT_LEVEL,
    )
