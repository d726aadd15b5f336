"""
Script: kaniko_plugin/plugin.py
What: Runs the full plugin step: auth setup, name resolution, build, artifact.
Doing: Writes docker config when needed, resolves primary and cache repos, runs kaniko, then records pushed images.
Why: The container entrypoint needs one ordered pre-flight sequence that stops on the first failure.
Goal: Never start kaniko without valid credentials and fully resolved image names.
"""

from __future__ import annotations

from pathlib import Path

from kaniko_plugin.artifact import read_digest, write_artifact_file
from kaniko_plugin.build import (
    DEFAULT_DIGEST_FILE,
    EXECUTOR_PATH,
    BuildRequest,
    run_executor,
)
from kaniko_plugin.docker_config import DOCKER_CONFIG_PATH, create_docker_config_file
from kaniko_plugin.registry import normalize_registry, resolve_repo_address
from kaniko_plugin.settings import PluginSettings, load_env_file


def build_request(settings: PluginSettings, *, digest_file: str = DEFAULT_DIGEST_FILE) -> BuildRequest:
    """Assemble the executor request, resolving primary and cache repos independently."""
    # v2 aliases are rewritten before they can end up in an image name.
    registry = normalize_registry(settings.registry)
    repo = resolve_repo_address(registry, settings.repo, settings.expand_repo)
    cache_repo = ""
    if settings.cache_repo:
        cache_repo = resolve_repo_address(registry, settings.cache_repo, settings.expand_repo)
    return BuildRequest(
        dockerfile=settings.dockerfile,
        context=settings.context,
        repo=repo,
        tags=list(settings.tags),
        args=list(settings.args),
        target=settings.target,
        mirrors=list(settings.mirrors),
        labels=list(settings.labels),
        skip_tls_verify=settings.skip_tls_verify,
        snapshot_mode=settings.snapshot_mode,
        enable_cache=settings.enable_cache,
        cache_repo=cache_repo,
        cache_ttl=settings.cache_ttl,
        digest_file=digest_file,
        no_push=settings.no_push,
        verbosity=settings.verbosity,
        platform=settings.platform,
        skip_unused_stages=settings.skip_unused_stages,
    )


def write_artifact(settings: PluginSettings, request: BuildRequest) -> Path | None:
    """Record the pushed images; skipped when nothing was pushed or no digest exists."""
    if settings.no_push:
        print("Skipping artifact file: nothing was pushed")
        return None
    digest = read_digest(request.digest_file)
    if not digest:
        print(f"Skipping artifact file: could not read digest file {request.digest_file}")
        return None
    path = write_artifact_file(
        settings.artifact_file,
        registry=normalize_registry(settings.registry),
        repo=request.repo,
        tags=request.tags,
        digest=digest,
    )
    print(f"Wrote artifact file {path}")
    return path


def run(
    settings: PluginSettings,
    *,
    config_path: Path = DOCKER_CONFIG_PATH,
    executor: str = EXECUTOR_PATH,
    digest_file: str = DEFAULT_DIGEST_FILE,
) -> BuildRequest:
    # Auth must be in place before kaniko starts; any error stops here.
    if settings.needs_auth:
        registry = create_docker_config_file(
            settings.username,
            settings.password,
            settings.registry,
            config_path=config_path,
        )
        print(f"Wrote docker config for {registry}")

    request = build_request(settings, digest_file=digest_file)
    run_executor(request, executor=executor)

    if settings.artifact_file:
        write_artifact(settings, request)
    return request


def main() -> None:
    # An env file must be loaded before settings read the environment.
    load_env_file()
    run(PluginSettings.from_env())


if __name__ == "__main__":
    main()
