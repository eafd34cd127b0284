"""Resolve counting profiles from the JSON defaults file."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import BackendError, ErrorCode
from .models import MIN_CHUNK_SIZE, GlobalSettings, ProfileSettings, RuntimeConfig

DEFAULT_CONFIG_PATH = Path("config/defaults.json")
DEFAULT_PROFILE = "sequential"
OPEN_ERROR_POLICIES = ("empty", "fail-fast")
PROFILE_FIELDS = ("description", "chunk_size", "max_parallel_files")

Overrides = Optional[Dict[str, Dict[str, Any]]]


@dataclass(slots=True)
class ConfigDocument:
    source: Path
    version: int
    global_settings: GlobalSettings
    profiles: Dict[str, ProfileSettings]

    def resolve(self, profile: str) -> RuntimeConfig:
        settings = self.profiles.get(profile)
        if settings is None:
            known = ", ".join(sorted(self.profiles))
            raise BackendError(
                ErrorCode.CONFIG_ERROR,
                f"Profile '{profile}' not found in {self.source}. Known: {known}",
                context={"profile": profile, "source": str(self.source)},
            )
        return RuntimeConfig(global_settings=self.global_settings, profile=settings)


def load_runtime_config(
    profile: str = DEFAULT_PROFILE,
    *,
    config_path: Optional[Path] = None,
    overrides: Overrides = None,
) -> RuntimeConfig:
    """Read the config file and return the settings for ``profile``.

    ``overrides`` may carry a ``global`` and a ``profile`` mapping; the
    latter is merged into the selected profile only.
    """

    document = load_config_document(config_path=config_path, overrides=overrides, profile_name=profile)
    return document.resolve(profile)


def load_config_document(
    *,
    config_path: Optional[Path] = None,
    overrides: Overrides = None,
    profile_name: Optional[str] = None,
) -> ConfigDocument:
    source = Path(config_path or DEFAULT_CONFIG_PATH)
    raw = _read_json_object(source)
    check = _FieldChecker(source)
    overrides = overrides or {}

    version = check.positive_int(raw.get("version"), "version")
    global_data = {**check.section(raw, "global"), **(overrides.get("global") or {})}
    global_settings = GlobalSettings(
        open_error_policy=check.open_error_policy(
            global_data.get("open_error_policy", GlobalSettings().open_error_policy)
        )
    )

    profile_overrides = overrides.get("profile") or {}
    profiles: Dict[str, ProfileSettings] = {}
    for name, data in check.section(raw, "profiles", non_empty=True).items():
        data = check.mapping(data, f"profiles.{name}")
        if name == profile_name:
            data = {**data, **profile_overrides}
        profiles[name] = check.profile(name, data)

    return ConfigDocument(
        source=source,
        version=version,
        global_settings=global_settings,
        profiles=profiles,
    )


def raises_on_open_error(policy: str) -> bool:
    """True when unopenable files should fail instead of counting as empty."""

    return policy.strip().lower() == "fail-fast"


def _read_json_object(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise BackendError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' not found") from exc
    except json.JSONDecodeError as exc:
        raise BackendError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise BackendError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' must hold a JSON object")
    return payload


class _FieldChecker:
    """Validates raw JSON values, naming the offending field and file on failure."""

    def __init__(self, source: Path) -> None:
        self.source = source

    def fail(self, message: str) -> BackendError:
        return BackendError(ErrorCode.CONFIG_ERROR, f"{message} in {self.source}")

    def mapping(self, value: Any, field: str) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise self.fail(f"{field} must be an object")
        return value

    def section(self, raw: Mapping[str, Any], name: str, *, non_empty: bool = False) -> Mapping[str, Any]:
        value = raw.get(name)
        if not isinstance(value, Mapping) or (non_empty and not value):
            raise self.fail(f"'{name}' section missing")
        return value

    def string(self, value: Any, field: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise self.fail(f"{field} must be a non-empty string")
        return value.strip()

    def positive_int(self, value: Any, field: str) -> int:
        # bool is an int subclass; "true" is not a size
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise self.fail(f"{field} must be an integer")
        try:
            num = int(value)
        except ValueError as exc:
            raise self.fail(f"{field} must be an integer") from exc
        if num <= 0:
            raise self.fail(f"{field} must be greater than zero")
        return num

    def open_error_policy(self, value: Any) -> str:
        policy = self.string(value, "global.open_error_policy").lower()
        if policy not in OPEN_ERROR_POLICIES:
            allowed = ", ".join(OPEN_ERROR_POLICIES)
            raise self.fail(f"Unsupported open_error_policy '{value}'. Allowed: {allowed}")
        return policy

    def profile(self, name: str, data: Mapping[str, Any]) -> ProfileSettings:
        prefix = f"profiles.{name}"
        missing = [field for field in PROFILE_FIELDS if field not in data]
        if missing:
            raise self.fail(f"Profile '{name}' missing fields {missing}")
        chunk_size = self.positive_int(data["chunk_size"], f"{prefix}.chunk_size")
        if chunk_size < MIN_CHUNK_SIZE:
            raise self.fail(f"{prefix}.chunk_size must be at least {MIN_CHUNK_SIZE} bytes")
        return ProfileSettings(
            description=self.string(data["description"], f"{prefix}.description"),
            chunk_size=chunk_size,
            max_parallel_files=self.positive_int(data["max_parallel_files"], f"{prefix}.max_parallel_files"),
        )
