"""Per-directory scanner configuration: which vulnerabilities to ignore."""

import os
import sys
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any

CONFIG_FILE_NAME = "osv-scanner.toml"


class ConfigError(Exception):
    """Raised when a configuration file cannot be found or parsed."""


@dataclass
class IgnoreEntry:
    """A vulnerability to ignore, optionally only until a given time."""

    id: str = ""
    ignore_until: datetime | None = None
    reason: str = ""


@dataclass
class Config:
    """A loaded configuration and the path it came from."""

    ignored_vulns: list[IgnoreEntry] = field(default_factory=list)
    load_path: str = ""

    def should_ignore(self, vuln_id: str) -> tuple[bool, IgnoreEntry]:
        """Tell whether vuln_id is ignored now, and by which entry."""
        entry = next((e for e in self.ignored_vulns if e.id == vuln_id), None)
        if entry is None:
            return False, IgnoreEntry()

        until = entry.ignore_until
        if until is None:
            return True, entry

        # Without a timezone the time is taken as local time.
        now = datetime.now(timezone.utc) if until.utcoffset() is not None else datetime.now()
        return until > now, entry


def _lookup(table: dict[str, Any], key: str) -> Any:
    if key in table:
        return table[key]
    folded = key.casefold()
    return next((value for name, value in table.items() if name.casefold() == folded), None)


def _to_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    raise ValueError(f"ignoreUntil must be a date or date-time, not {value!r}")


def _entry_from_toml(table: Any) -> IgnoreEntry:
    if not isinstance(table, dict):
        raise ValueError(f"IgnoredVulns entries must be tables, not {table!r}")
    entry_id = _lookup(table, "id") or ""
    reason = _lookup(table, "reason") or ""
    if not isinstance(entry_id, str) or not isinstance(reason, str):
        raise ValueError("id and reason must be strings")
    return IgnoreEntry(
        id=entry_id,
        ignore_until=_to_datetime(_lookup(table, "ignoreUntil")),
        reason=reason,
    )


def _config_from_toml(data: dict[str, Any]) -> list[IgnoreEntry]:
    entries = _lookup(data, "IgnoredVulns") or []
    if not isinstance(entries, list):
        raise ValueError("IgnoredVulns must be an array of tables")
    return [_entry_from_toml(table) for table in entries]


def config_path_for(target: str) -> str:
    """Return the config file path that belongs to a file or directory."""
    try:
        is_dir = os.path.isdir(target) if os.stat(target) else False
    except OSError as err:
        raise ConfigError(f"failed to stat target: {err}") from err

    folder = target if is_dir else os.path.dirname(target)
    return os.path.join(folder, CONFIG_FILE_NAME)


def load_config(config_path: str) -> Config:
    """Load the configuration file at config_path."""
    try:
        handle = open(config_path, "rb")
    except OSError:
        raise ConfigError(f"no config file found on this path: {config_path}") from None

    with handle:
        try:
            ignored = _config_from_toml(tomllib.load(handle))
        except (tomllib.TOMLDecodeError, ValueError) as err:
            raise ConfigError(f"failed to parse config file: {err}") from err

    return Config(ignored_vulns=ignored, load_path=config_path)


def _print_text(text: str) -> None:
    sys.stdout.write(text)


@dataclass
class ConfigManager:
    """Finds and caches the configuration that applies to each scanned path."""

    override_config: Config | None = None
    default_config: Config = field(default_factory=Config)
    config_map: dict[str, Config] = field(default_factory=dict)
    report: Callable[[str], None] = _print_text

    def use_override(self, config_path: str) -> None:
        """Use the config file at config_path for every path."""
        self.override_config = load_config(config_path)

    def get(self, target_path: str) -> Config:
        """Return the configuration that applies to target_path."""
        if self.override_config is not None:
            return self.override_config

        try:
            config_path = config_path_for(target_path)
        except ConfigError:
            # Targets that are not files, such as images or commits, have no config.
            return Config()

        cached = self.config_map.get(config_path)
        if cached is not None:
            return cached

        try:
            config = load_config(config_path)
        except ConfigError:
            config = self.default_config
        else:
            self.report(f"Loaded filter from: {config.load_path}\n")

        self.config_map[config_path] = config
        return config