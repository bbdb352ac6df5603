"""Writes generated artifacts to disk."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from src.ai.client import strip_code_fence
from src.models.artifact import GeneratedArtifact

logger = logging.getLogger(__name__)

LANGUAGE_EXTENSIONS = {
    "typescript": "ts",
    "ts": "ts",
    "java": "java",
    "gherkin": "feature",
    "feature": "feature",
}


def artifact_filename(artifact: GeneratedArtifact) -> str:
    """File name derived from the generator type and the fence language."""
    ext = LANGUAGE_EXTENSIONS.get((artifact.language or "").lower(), "md")
    return f"{artifact.generator_type}.{ext}"


def write_artifact(artifact: GeneratedArtifact, output_dir: Path) -> Path:
    """Write one artifact with its code fence removed; returns the file path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / artifact_filename(artifact)
    # Tables and prose read better with the fence kept as-is
    body = strip_code_fence(artifact.content) if artifact.language else artifact.content
    with open(path, "w", encoding="utf-8") as f:
        f.write(body)
        f.write("\n")
    logger.info("Wrote %s", path)
    return path


def write_manifest(
    artifacts: list[GeneratedArtifact],
    files: list[Path],
    output_path: Path,
) -> None:
    """Write a JSON manifest describing a generation run."""
    manifest = {
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "artifacts": [
            {
                "template_key": a.template_key.value,
                "generator_type": a.generator_type,
                "model_id": a.model_id,
                "language": a.language,
                "file": str(path),
            }
            for a, path in zip(artifacts, files)
        ],
    }
    with open(output_path, "w") as f:
        json.dump(manifest, f, indent=2, default=str)
