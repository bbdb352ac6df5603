"""Configuration models for the test artifact generator."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_PATH = "testgen-config.json"


class BedrockConfig(BaseModel):
    aws_region: str = "us-east-1"
    aws_access_key: Optional[str] = None
    aws_secret_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    aws_profile: Optional[str] = None
    timeout_seconds: float = 600.0

    @field_validator("aws_access_key", "aws_secret_key", "aws_session_token", mode="before")
    @classmethod
    def resolve_env_secret(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and v.startswith("env:"):
            env_var = v[4:]
            resolved = os.environ.get(env_var)
            if resolved is None:
                raise ValueError(f"Environment variable '{env_var}' not set")
            return resolved
        return v


class GeneratorConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    # Endpoint
    bedrock: BedrockConfig = Field(default_factory=BedrockConfig)

    # Model settings
    model_id: str = "anthropic.claude-3-5-sonnet-20240620-v1:0"
    max_tokens: int = 8000
    temperature: float = 0.2

    # Prompt substitution
    strict_variables: bool = False

    # Execution
    max_parallel_requests: int = 3

    # Output
    output_dir: str = "./generated-tests"
    debug_dir: Optional[str] = None

    # DOM capture
    capture_wait_until: str = "networkidle"
    capture_timeout_ms: int = 30000

    @classmethod
    def load(cls, path: str | Path) -> "GeneratorConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
