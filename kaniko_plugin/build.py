"""
Script: kaniko_plugin/build.py
What: The build request handed to the kaniko executor.
Doing: Holds resolved build inputs and renders them as executor flags.
Why: Keeps flag spelling in one place, separate from config loading.
Goal: Run `/kaniko/executor` with exactly the requested options.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kaniko_plugin.common import run_cmd


EXECUTOR_PATH = "/kaniko/executor"
DEFAULT_DIGEST_FILE = "/kaniko/digest-file"


@dataclass
class BuildRequest:
    dockerfile: str
    context: str
    repo: str
    tags: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    target: str = ""
    mirrors: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    skip_tls_verify: bool = False
    snapshot_mode: str = ""
    enable_cache: bool = False
    cache_repo: str = ""
    cache_ttl: int = 0
    digest_file: str = DEFAULT_DIGEST_FILE
    no_push: bool = False
    verbosity: str = ""
    platform: str = ""
    skip_unused_stages: bool = False


def executor_args(request: BuildRequest) -> list[str]:
    """Render a build request as kaniko executor command-line flags."""
    args = [
        f"--dockerfile={request.dockerfile}",
        f"--context=dir://{request.context}",
    ]

    # Without push, kaniko still needs to know there is no destination.
    if request.no_push:
        args.append("--no-push")
    else:
        args.extend(f"--destination={request.repo}:{tag}" for tag in request.tags)

    args.extend(f"--build-arg={arg}" for arg in request.args)
    args.extend(f"--label={label}" for label in request.labels)

    if request.target:
        args.append(f"--target={request.target}")
    if request.digest_file:
        args.append(f"--digest-file={request.digest_file}")

    if request.enable_cache:
        args.append("--cache=true")
        if request.cache_repo:
            args.append(f"--cache-repo={request.cache_repo}")
        if request.cache_ttl:
            args.append(f"--cache-ttl={request.cache_ttl}h")

    args.extend(f"--registry-mirror={mirror}" for mirror in request.mirrors)

    if request.skip_tls_verify:
        args.append("--skip-tls-verify=true")
    if request.snapshot_mode:
        args.append(f"--snapshotMode={request.snapshot_mode}")
    if request.verbosity:
        args.append(f"--verbosity={request.verbosity}")
    if request.platform:
        args.append(f"--customPlatform={request.platform}")
    if request.skip_unused_stages:
        args.append("--skip-unused-stages")
    return args


def run_executor(request: BuildRequest, *, executor: str = EXECUTOR_PATH) -> None:
    command = [executor, *executor_args(request)]
    # Build args can carry secrets, so only the destination is logged.
    print(f"Running kaniko executor for {request.repo or '<no repo>'}")
    run_cmd(command, capture_output=False)
