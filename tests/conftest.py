"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from src.ai.client import set_debug_dir
from src.ai.prompts.registry import PromptRegistry
from src.models.artifact import GenerationRequest
from src.models.config import BedrockConfig, GeneratorConfig


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def bedrock_config() -> BedrockConfig:
    """Create a test Bedrock configuration."""
    return BedrockConfig(
        aws_region="us-west-2",
        aws_access_key="AKIATEST",
        aws_secret_key="secret",
        timeout_seconds=30.0,
    )


@pytest.fixture
def generator_config(bedrock_config: BedrockConfig, tmp_path: Path) -> GeneratorConfig:
    """Create a test generator configuration."""
    return GeneratorConfig(
        bedrock=bedrock_config,
        model_id="anthropic.claude-test-v1:0",
        max_tokens=4000,
        temperature=0.1,
        max_parallel_requests=2,
        output_dir=str(tmp_path / "out"),
    )


@pytest.fixture
def temp_config_file(tmp_path: Path, generator_config: GeneratorConfig) -> Path:
    """Write the test configuration to a temporary file."""
    config_path = tmp_path / "testgen-config.json"
    generator_config.save(config_path)
    return config_path


# ============================================================================
# Prompt Fixtures
# ============================================================================


@pytest.fixture
def registry() -> PromptRegistry:
    """The default prompt registry."""
    return PromptRegistry.default()


@pytest.fixture
def sample_dom() -> str:
    """A small login form."""
    return (
        "<form id='login'>"
        "<input id='username' name='username'/>"
        "<input id='password' name='password' type='password'/>"
        "<button type='submit'>Sign in</button>"
        "</form>"
    )


@pytest.fixture
def generation_request(sample_dom: str) -> GenerationRequest:
    """A generation request for the login form."""
    return GenerationRequest(
        dom_content=sample_dom,
        user_action="log in with valid credentials",
        page_url="https://example.com/login",
    )


# ============================================================================
# Model Endpoint Fixtures
# ============================================================================


def make_bedrock_response(text: str, stop_reason: str = "end_turn") -> Mock:
    """Build a mock Messages API response with a single text block."""
    mock_content = Mock()
    mock_content.type = "text"
    mock_content.text = text
    mock_response = Mock()
    mock_response.content = [mock_content]
    mock_response.stop_reason = stop_reason
    return mock_response


@pytest.fixture
def bedrock_response():
    """Factory fixture for mock endpoint responses."""
    return make_bedrock_response


@pytest.fixture(autouse=True)
def _no_debug_dir():
    """Keep exchange logs off unless a test enables them."""
    set_debug_dir(None)
    yield
    set_debug_dir(None)
