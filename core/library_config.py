"""Shared library location settings for the libclang bindings.

Settings come from an optional YAML file and from environment variables,
with the environment taking precedence. Parsing is lenient by default and
strict when ``STRICT_CONFIG_VALIDATION`` is set (or ``strict=True``).
"""

from __future__ import annotations

import ctypes.util
import importlib.util
import logging
import os
import platform
from dataclasses import dataclass, replace
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "CLANGBIND_CONFIG"
LIBRARY_FILE_ENV = "CLANGBIND_LIBRARY_FILE"
LIBRARY_PATH_ENV = "CLANGBIND_LIBRARY_PATH"
COMPATIBILITY_CHECK_ENV = "CLANGBIND_COMPATIBILITY_CHECK"

_KNOWN_KEYS = {"library_file", "library_path", "compatibility_check"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class LibraryConfig:
    """Where to find libclang and how strictly to bind it."""

    library_file: Optional[str] = None
    library_path: Optional[str] = None
    compatibility_check: bool = True


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _parse_bool(value: Any, key: str, strict: bool, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    msg = f"'{key}' must be a boolean, got {value!r}"
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; using %s", msg, default)
    return default


def _read_config_file(path: str, strict: bool) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Library config file not found: {path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse library config YAML at {path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        msg = f"Unexpected library config payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    unknown = sorted(set(payload) - _KNOWN_KEYS)
    if unknown:
        msg = "Unknown library config keys: " + ", ".join(unknown)
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring them", msg)
    return {k: v for k, v in payload.items() if k in _KNOWN_KEYS}


def load_library_config(
    path: Optional[str] = None,
    strict: Optional[bool] = None,
) -> LibraryConfig:
    """Build the effective library configuration.

    ``path`` defaults to the file named by ``CLANGBIND_CONFIG``; with neither
    set, only the environment is consulted.
    """
    if strict is None:
        strict = resolve_strict_config_validation()
    config_path = path or os.getenv(CONFIG_ENV)

    config = LibraryConfig()
    if config_path:
        payload = _read_config_file(config_path, strict=strict)
        if payload.get("library_file"):
            config = replace(config, library_file=os.fspath(payload["library_file"]))
        if payload.get("library_path"):
            config = replace(config, library_path=os.fspath(payload["library_path"]))
        if "compatibility_check" in payload:
            config = replace(
                config,
                compatibility_check=_parse_bool(
                    payload["compatibility_check"],
                    "compatibility_check",
                    strict,
                    config.compatibility_check,
                ),
            )

    env_file = os.getenv(LIBRARY_FILE_ENV)
    if env_file:
        config = replace(config, library_file=env_file)
    env_path = os.getenv(LIBRARY_PATH_ENV)
    if env_path:
        config = replace(config, library_path=env_path)
    env_check = os.getenv(COMPATIBILITY_CHECK_ENV)
    if env_check is not None:
        config = replace(
            config,
            compatibility_check=_parse_bool(
                env_check,
                COMPATIBILITY_CHECK_ENV,
                strict,
                config.compatibility_check,
            ),
        )

    logger.debug("Resolved library config: %s", config)
    return config


def platform_library_name(system: Optional[str] = None) -> str:
    """Return the file name libclang carries on ``system``."""
    name = system or platform.system()
    if name == "Darwin":
        return "libclang.dylib"
    if name == "Windows":
        return "libclang.dll"
    return "libclang.so"


def bundled_library_file(system: Optional[str] = None) -> Optional[str]:
    """Locate the shared object shipped inside the ``libclang`` wheel."""
    spec = importlib.util.find_spec("clang")
    if spec is None or not spec.submodule_search_locations:
        return None
    for location in spec.submodule_search_locations:
        candidate = os.path.join(location, "native", platform_library_name(system))
        if os.path.isfile(candidate):
            return candidate
    return None


def candidate_library_files(
    config: LibraryConfig,
    system: Optional[str] = None,
) -> list[str]:
    """Ordered list of library files to try loading.

    An explicit ``library_file`` wins outright. Otherwise ``library_path``,
    the wheel-bundled library, the system linker search and finally the bare
    platform name are tried in that order.
    """
    if config.library_file:
        return [config.library_file]

    name = platform_library_name(system)
    candidates: list[str] = []
    if config.library_path:
        candidates.append(os.path.join(config.library_path, name))

    bundled = bundled_library_file(system)
    if bundled:
        candidates.append(bundled)

    found = ctypes.util.find_library("clang")
    if found:
        candidates.append(found)

    candidates.append(name)

    unique: list[str] = []
    for candidate in candidates:
        if candidate not in unique:
            unique.append(candidate)
    return unique
