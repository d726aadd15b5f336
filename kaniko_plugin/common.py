"""
Script: kaniko_plugin/common.py
What: Shared helper functions and errors used by all `kaniko_plugin` modules.
Doing: Wraps env reads, typed env parsing, and command execution.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all plugin modules.
"""

from __future__ import annotations

import os
import subprocess
from typing import Sequence


class PluginError(RuntimeError):
    """Raised when the plugin hits a known error condition."""


class ConfigError(PluginError):
    """Raised when configuration or pre-flight setup is invalid."""


class MissingFieldError(ConfigError):
    """Raised when a required credential field is empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field.capitalize()} must be specified")
        self.field = field


class ConfigIOError(ConfigError):
    """
    Raised when the docker config directory or file cannot be created.

    `operation` is `"directory"` or `"file"`; the underlying `OSError` is kept
    as `__cause__` by the caller.
    """

    def __init__(self, operation: str, path: str, reason: OSError) -> None:
        if operation == "directory":
            message = f"failed to create {path} directory: {reason}"
        else:
            message = f"failed to create docker config file {path}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.path = path


# Same spellings Go's strconv.ParseBool accepts, since existing pipelines set them.
TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    return os.environ.get(name, default)


def bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable; empty or unset means `default`."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {value}")


def int_env(name: str, default: int = 0) -> int:
    """Parse an integer environment variable; empty or unset means `default`."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer value for {name}: {value}") from exc


def split_list(value: str) -> list[str]:
    """Split a comma-separated value, dropping blank entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def list_env(name: str) -> list[str]:
    """Return a comma-separated environment variable as a list."""
    return split_list(os.environ.get(name, ""))


def run_cmd(
    args: Sequence[str],
    *,
    capture_output: bool = True,
    cwd: str | None = None,
) -> str:
    """Run a command and return stdout, raising a readable error on failure."""
    try:
        result = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=capture_output,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        stdout = (exc.stdout or "").strip()
        details = stderr or stdout or str(exc)
        raise PluginError(f"Command failed: {' '.join(args)}\n{details}") from exc
    except FileNotFoundError as exc:
        raise PluginError(f"Command not found: {args[0]}") from exc

    if not capture_output:
        return ""
    return result.stdout
