"""
Script: kaniko_plugin/registry.py
What: Registry endpoint constants and repository address resolution.
Doing: Maps legacy Docker Hub aliases to the endpoint kaniko accepts, and prefixes repo names with the registry host.
Why: Image tags and auth keys must agree on one registry spelling.
Goal: Produce the exact repository names used for push destinations, cache layers, and artifacts.
"""

from __future__ import annotations

import enum

from kaniko_plugin.common import bool_env, optional_env


V1_REGISTRY_URL = "https://index.docker.io/v1/"  # Default registry
V2_REGISTRY_URL = "https://index.docker.io/v2/"  # v2 registry is not supported
V2_HUB_REGISTRY_URL = "https://registry.hub.docker.com/v2/"

URL_SCHEMES = ("https://", "http://")


class RegistryKind(enum.Enum):
    V1 = "v1"
    V2 = "v2"
    V2_HUB = "v2-hub"
    CUSTOM = "custom"


KNOWN_REGISTRIES = {
    V1_REGISTRY_URL: RegistryKind.V1,
    V2_REGISTRY_URL: RegistryKind.V2,
    V2_HUB_REGISTRY_URL: RegistryKind.V2_HUB,
}

# Kaniko cannot authenticate against the v2 Docker Hub endpoints.
# Refer issue: https://github.com/GoogleContainerTools/kaniko/issues/1209
SUBSTITUTIONS = {
    RegistryKind.V2: V1_REGISTRY_URL,
    RegistryKind.V2_HUB: V1_REGISTRY_URL,
}


def registry_kind(registry: str) -> RegistryKind:
    return KNOWN_REGISTRIES.get(registry, RegistryKind.CUSTOM)


def normalize_registry(registry: str) -> str:
    """Return the registry kaniko should use, rewriting unsupported aliases."""
    return SUBSTITUTIONS.get(registry_kind(registry), registry)


def strip_scheme(registry: str) -> str:
    """Drop a leading `http://` or `https://`; image names never carry one."""
    for scheme in URL_SCHEMES:
        if registry.startswith(scheme):
            return registry[len(scheme):]
    return registry


def resolve_repo_address(registry: str, repo: str, expand: bool) -> str:
    """
    Compute the repository name used for tagging and pushing.

    Rules:
    - No prefix when expansion is off, no registry is set, or the registry is
      the default v1 endpoint (Docker Hub names never carry it).
    - A repo that already starts with the registry host is kept as-is, so
      callers that pass fully qualified names do not get a double prefix.
    - Otherwise the result is `<registry-host>/<repo>`.
    """
    if not expand or not registry or registry_kind(registry) is RegistryKind.V1:
        return repo

    # Trim off trailing slash to prevent a double slash when joining.
    trimmed = registry[:-1] if registry.endswith("/") else registry
    host = strip_scheme(trimmed)
    if repo.startswith(f"{host}/") or repo.startswith(f"{trimmed}/"):
        return repo
    return f"{host}/{repo}"


def main() -> None:
    # Print the resolved addresses without running a build.
    registry = optional_env("PLUGIN_REGISTRY", V1_REGISTRY_URL)
    expand = bool_env("PLUGIN_EXPAND_REPO")
    repo = optional_env("PLUGIN_REPO")
    cache_repo = optional_env("PLUGIN_CACHE_REPO")

    print(f"Resolved repo: {resolve_repo_address(registry, repo, expand)}")
    if cache_repo:
        print(f"Resolved cache repo: {resolve_repo_address(registry, cache_repo, expand)}")


if __name__ == "__main__":
    main()
