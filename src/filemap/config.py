"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from filemap.paths import PATH_FLAVORS, PathFlavor

CONFIG_FILE_NAME = "filemap.toml"
DEFAULT_JOURNAL_PATH = Path(".filemap") / "changes.jsonl"


@dataclass(slots=True, frozen=True)
class FileMapConfig:
    """Fully merged file map configuration."""

    path_flavor: PathFlavor = "auto"
    glob_dot: bool = True
    journal_enabled: bool = False
    journal_path: Path | None = None

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "paths": {"flavor": self.path_flavor},
            "glob": {"dot": self.glob_dot},
            "journal": {
                "enabled": self.journal_enabled,
                "path": str(self.journal_path) if self.journal_path is not None else None,
            },
        }


@dataclass(slots=True, frozen=True)
class ConfigOverrides:
    """Optional caller overrides applied at highest precedence."""

    path_flavor: PathFlavor | None = None
    glob_dot: bool | None = None
    journal_enabled: bool | None = None
    journal_path: Path | None = None


def default_config() -> FileMapConfig:
    """Build default config."""
    return FileMapConfig()


def load_config_file(config_dir: Path) -> dict[str, object]:
    """Load optional filemap.toml from config_dir."""
    config_path = config_dir / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_flavor(value: object, name: str, default: PathFlavor) -> PathFlavor:
    if value is None:
        return default
    if not isinstance(value, str) or value not in PATH_FLAVORS:
        raise ValueError(f"Config field '{name}' must be one of {', '.join(PATH_FLAVORS)}.")
    return value  # type: ignore[return-value]


def merge_config(
    base: FileMapConfig,
    payload: dict[str, object],
    overrides: ConfigOverrides,
    config_dir: Path | None = None,
) -> FileMapConfig:
    """Merge defaults, config file, then caller overrides."""
    paths_payload = _get_table(payload, "paths")
    glob_payload = _get_table(payload, "glob")
    journal_payload = _get_table(payload, "journal")

    path_flavor = _optional_flavor(paths_payload.get("flavor"), "paths.flavor", base.path_flavor)
    glob_dot = _optional_bool(glob_payload.get("dot"), "glob.dot", base.glob_dot)
    journal_enabled = _optional_bool(
        journal_payload.get("enabled"), "journal.enabled", base.journal_enabled
    )

    journal_path = base.journal_path
    if "path" in journal_payload:
        raw_path = journal_payload["path"]
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError("Config field 'journal.path' must be a non-empty string.")
        journal_path = Path(raw_path)
    if journal_enabled and journal_path is None:
        journal_path = DEFAULT_JOURNAL_PATH
    if journal_path is not None and config_dir is not None and not journal_path.is_absolute():
        journal_path = config_dir / journal_path

    merged = FileMapConfig(
        path_flavor=path_flavor,
        glob_dot=glob_dot,
        journal_enabled=journal_enabled,
        journal_path=journal_path,
    )
    return apply_overrides(merged, overrides)


def apply_overrides(config: FileMapConfig, overrides: ConfigOverrides) -> FileMapConfig:
    """Apply caller overrides at highest precedence."""
    path_flavor = _optional_flavor(overrides.path_flavor, "overrides.path_flavor", config.path_flavor)
    glob_dot = _optional_bool(overrides.glob_dot, "overrides.glob_dot", config.glob_dot)
    journal_enabled = _optional_bool(
        overrides.journal_enabled, "overrides.journal_enabled", config.journal_enabled
    )
    journal_path = overrides.journal_path or config.journal_path
    if journal_enabled and journal_path is None:
        journal_path = DEFAULT_JOURNAL_PATH
    return FileMapConfig(
        path_flavor=path_flavor,
        glob_dot=glob_dot,
        journal_enabled=journal_enabled,
        journal_path=journal_path.resolve() if journal_path is not None else None,
    )


def load_effective_config(
    config_dir: Path | None = None, overrides: ConfigOverrides | None = None
) -> FileMapConfig:
    """Load effective config using merge order defaults -> filemap.toml -> overrides."""
    base = default_config()
    if config_dir is None:
        return apply_overrides(base, overrides or ConfigOverrides())
    resolved_dir = config_dir.resolve()
    payload = load_config_file(resolved_dir)
    return merge_config(base, payload, overrides or ConfigOverrides(), config_dir=resolved_dir)
