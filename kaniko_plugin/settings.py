"""
Script: kaniko_plugin/settings.py
What: Loads plugin configuration from `PLUGIN_*` environment variables.
Doing: Reads an optional env file, then parses strings, lists, booleans, and integers into one settings object.
Why: The pipeline runner passes every plugin option through the environment.
Goal: Hand the rest of the plugin flat, already-validated values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from kaniko_plugin.common import (
    ConfigError,
    bool_env,
    int_env,
    list_env,
    optional_env,
    split_list,
)
from kaniko_plugin.registry import V1_REGISTRY_URL


DEFAULT_TAGS = ("latest",)
TAGS_FILE = Path(".tags")


def load_env_file() -> Path | None:
    """
    Load `PLUGIN_ENV_FILE` into the process environment when it is set.

    Variables that are already set keep their value.
    """
    env_file = optional_env("PLUGIN_ENV_FILE")
    if not env_file:
        return None
    env_path = Path(env_file)
    if not env_path.is_file():
        raise ConfigError(f"Env file not found: {env_file}")
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def read_tags(tags_file: Path = TAGS_FILE) -> list[str]:
    """Return tags from `PLUGIN_TAGS`, then the `.tags` file, then `latest`."""
    # An empty PLUGIN_TAGS counts as unset so pushes always get a destination.
    tags = list_env("PLUGIN_TAGS")
    if tags:
        return tags
    if tags_file.is_file():
        tags = split_list(tags_file.read_text(encoding="utf-8").replace("\n", ","))
        if tags:
            return tags
    return list(DEFAULT_TAGS)


@dataclass
class PluginSettings:
    dockerfile: str = "Dockerfile"
    context: str = "."
    tags: list[str] = field(default_factory=lambda: list(DEFAULT_TAGS))
    expand_repo: bool = False
    dockerconfig_override: bool = False
    args: list[str] = field(default_factory=list)
    target: str = ""
    repo: str = ""
    labels: list[str] = field(default_factory=list)
    registry: str = V1_REGISTRY_URL
    mirrors: list[str] = field(default_factory=list)
    username: str = ""
    password: str = ""
    skip_tls_verify: bool = False
    snapshot_mode: str = ""
    enable_cache: bool = False
    cache_repo: str = ""
    cache_ttl: int = 0
    artifact_file: str = ""
    no_push: bool = False
    verbosity: str = ""
    platform: str = ""
    skip_unused_stages: bool = False

    @classmethod
    def from_env(cls, *, tags_file: Path = TAGS_FILE) -> "PluginSettings":
        return cls(
            dockerfile=optional_env("PLUGIN_DOCKERFILE", "Dockerfile"),
            context=optional_env("PLUGIN_CONTEXT", "."),
            tags=read_tags(tags_file),
            expand_repo=bool_env("PLUGIN_EXPAND_REPO"),
            dockerconfig_override=bool_env("PLUGIN_DOCKERCONFIG_OVERRIDE"),
            args=list_env("PLUGIN_BUILD_ARGS"),
            target=optional_env("PLUGIN_TARGET"),
            repo=optional_env("PLUGIN_REPO"),
            labels=list_env("PLUGIN_CUSTOM_LABELS"),
            registry=optional_env("PLUGIN_REGISTRY", V1_REGISTRY_URL),
            mirrors=list_env("PLUGIN_REGISTRY_MIRRORS"),
            username=optional_env("PLUGIN_USERNAME"),
            password=optional_env("PLUGIN_PASSWORD"),
            skip_tls_verify=bool_env("PLUGIN_SKIP_TLS_VERIFY"),
            snapshot_mode=optional_env("PLUGIN_SNAPSHOT_MODE"),
            enable_cache=bool_env("PLUGIN_ENABLE_CACHE"),
            cache_repo=optional_env("PLUGIN_CACHE_REPO"),
            cache_ttl=int_env("PLUGIN_CACHE_TTL"),
            artifact_file=optional_env("PLUGIN_ARTIFACT_FILE"),
            no_push=bool_env("PLUGIN_NO_PUSH"),
            verbosity=optional_env("PLUGIN_VERBOSITY"),
            platform=optional_env("PLUGIN_PLATFORM"),
            skip_unused_stages=bool_env("PLUGIN_SKIP_UNUSED_STAGES"),
        )

    @property
    def needs_auth(self) -> bool:
        """
        True when the docker config file should be written.

        Auth is needed when pushing or when credentials are given anyway,
        unless the pipeline supplies its own docker config.
        """
        return (not self.no_push or bool(self.username)) and not self.dockerconfig_override
