"""
Script: kaniko_plugin/artifact.py
What: Writes the artifact file that lists the images this run pushed.
Doing: Reads the digest kaniko produced and records one entry per tag.
Why: Later pipeline steps need the exact image names and digest without re-inspecting the registry.
Goal: Save a small JSON record of the published images.
"""

from __future__ import annotations

import json
from pathlib import Path


ARTIFACT_KIND = "docker/v1"
DOCKER_REGISTRY_TYPE = "Docker"


def read_digest(digest_file: str) -> str:
    """Return the digest kaniko wrote, or empty string when there is none."""
    path = Path(digest_file)
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8").strip()


def build_artifact_document(
    *,
    registry: str,
    repo: str,
    tags: list[str],
    digest: str,
    registry_type: str = DOCKER_REGISTRY_TYPE,
) -> dict:
    # One image entry per tag; all tags share the digest of the single build.
    return {
        "kind": ARTIFACT_KIND,
        "data": {
            "registryType": registry_type,
            "registryUrl": registry,
            "images": [{"image": f"{repo}:{tag}", "digest": digest} for tag in tags],
        },
    }


def write_artifact_file(
    artifact_file: str,
    *,
    registry: str,
    repo: str,
    tags: list[str],
    digest: str,
    registry_type: str = DOCKER_REGISTRY_TYPE,
) -> Path:
    document = build_artifact_document(
        registry=registry,
        repo=repo,
        tags=tags,
        digest=digest,
        registry_type=registry_type,
    )
    path = Path(artifact_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    return path
