"""
Script: kaniko_plugin/docker_config.py
What: Writes the docker `config.json` that kaniko reads for registry auth.
Doing: Validates credentials, rewrites unsupported registry aliases, then writes one `auths` entry.
Why: Kaniko only authenticates through this file; it has no login command.
Goal: Leave a fresh, single-registry auth file before the executor starts.
"""

from __future__ import annotations

import base64
import json
from pathlib import Path

from kaniko_plugin.common import (
    ConfigIOError,
    MissingFieldError,
    optional_env,
)
from kaniko_plugin.registry import V1_REGISTRY_URL, normalize_registry


DOCKER_CONFIG_DIR = Path("/kaniko/.docker")
DOCKER_CONFIG_PATH = DOCKER_CONFIG_DIR / "config.json"


def encode_auth(username: str, password: str) -> str:
    """Return standard base64 of `username:password`."""
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def build_docker_config(username: str, password: str, registry: str) -> dict:
    """
    Build the auth document for one registry.

    Shape: `{"auths": {"<registry>": {"auth": "<base64>"}}}`.
    """
    return {"auths": {registry: {"auth": encode_auth(username, password)}}}


def create_docker_config_file(
    username: str,
    password: str,
    registry: str,
    *,
    config_path: Path = DOCKER_CONFIG_PATH,
) -> str:
    """
    Write the docker config file and return the registry key used.

    Any existing file at `config_path` is replaced, never merged.
    """
    if not username:
        raise MissingFieldError("username")
    if not password:
        raise MissingFieldError("password")
    if not registry:
        raise MissingFieldError("registry")

    normalized = normalize_registry(registry)
    if normalized != registry:
        print(
            "Docker v2 registry is not supported in kaniko. "
            "Refer issue: https://github.com/GoogleContainerTools/kaniko/issues/1209"
        )
        print(f"Using v1 registry instead: {normalized}")

    config_dir = config_path.parent
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigIOError("directory", str(config_dir), exc) from exc

    document = build_docker_config(username, password, normalized)
    try:
        config_path.write_text(json.dumps(document), encoding="utf-8")
    except OSError as exc:
        raise ConfigIOError("file", str(config_path), exc) from exc

    return normalized


def main() -> None:
    # Only write credentials; the build command does this as part of its run.
    registry = create_docker_config_file(
        optional_env("PLUGIN_USERNAME"),
        optional_env("PLUGIN_PASSWORD"),
        optional_env("PLUGIN_REGISTRY", V1_REGISTRY_URL),
    )
    print(f"Wrote docker config for {registry} to {DOCKER_CONFIG_PATH}")


if __name__ == "__main__":
    main()
