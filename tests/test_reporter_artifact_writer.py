"""Tests for writing generated artifacts."""

import json
from pathlib import Path

from src.ai.prompts.templates import TemplateKey
from src.models.artifact import GeneratedArtifact
from src.reporter.artifact_writer import artifact_filename, write_artifact, write_manifest


def _artifact(key: TemplateKey, label: str, content: str, language=None) -> GeneratedArtifact:
    return GeneratedArtifact(
        template_key=key,
        generator_type=label,
        prompt="prompt",
        content=content,
        language=language,
        model_id="anthropic.claude-test-v1:0",
    )


class TestArtifactFilename:
    """Tests for artifact_filename."""

    def test_extension_from_language(self):
        """Test known languages map to their file extension."""
        ts = _artifact(TemplateKey.PLAYWRIGHT_CODE_GENERATION, "Playwright-TS-Code-Generator",
                       "", "typescript")
        java = _artifact(TemplateKey.SELENIUM_JAVA_TEST_ONLY, "Selenium-Java-Test-Only", "", "java")
        feature = _artifact(TemplateKey.CUCUMBER_ONLY, "Cucumber-Only", "", "gherkin")

        assert artifact_filename(ts) == "Playwright-TS-Code-Generator.ts"
        assert artifact_filename(java) == "Selenium-Java-Test-Only.java"
        assert artifact_filename(feature) == "Cucumber-Only.feature"

    def test_untagged_is_markdown(self):
        """Test output without a language is written as markdown."""
        data = _artifact(TemplateKey.GENERATE_TEST_DATA_ONLY, "Generate-Test-Data-Only", "| a |")
        assert artifact_filename(data) == "Generate-Test-Data-Only.md"


class TestWriteArtifact:
    """Tests for write_artifact."""

    def test_code_written_without_fence(self, tmp_path: Path):
        """Test code artifacts lose their fence on disk."""
        artifact = _artifact(TemplateKey.CUCUMBER_ONLY, "Cucumber-Only",
                             "```gherkin\nFeature: Login\n```", "gherkin")

        path = write_artifact(artifact, tmp_path / "out")

        assert path == tmp_path / "out" / "Cucumber-Only.feature"
        assert path.read_text(encoding="utf-8") == "Feature: Login\n"

    def test_untagged_written_as_is(self, tmp_path: Path):
        """Test untagged content is written unchanged."""
        artifact = _artifact(TemplateKey.GENERATE_TEST_DATA_ONLY, "Generate-Test-Data-Only",
                             "| Name |\n| John |")

        path = write_artifact(artifact, tmp_path)

        assert path.read_text(encoding="utf-8") == "| Name |\n| John |\n"


class TestWriteManifest:
    """Tests for write_manifest."""

    def test_manifest_lists_artifacts(self, tmp_path: Path):
        """Test the manifest names each artifact and its file."""
        artifacts = [
            _artifact(TemplateKey.CUCUMBER_ONLY, "Cucumber-Only", "x", "gherkin"),
            _artifact(TemplateKey.GENERATE_TEST_CASE_ONLY, "Generate-Test-Case-Only", "y"),
        ]
        files = [tmp_path / "Cucumber-Only.feature", tmp_path / "Generate-Test-Case-Only.md"]
        manifest_path = tmp_path / "manifest.json"

        write_manifest(artifacts, files, manifest_path)

        with open(manifest_path) as f:
            data = json.load(f)
        assert "generated_at" in data
        assert [a["template_key"] for a in data["artifacts"]] == [
            "CUCUMBER_ONLY", "GENERATE_TEST_CASE_ONLY",
        ]
        assert data["artifacts"][0]["language"] == "gherkin"
        assert data["artifacts"][1]["language"] is None
        assert data["artifacts"][0]["file"].endswith("Cucumber-Only.feature")
