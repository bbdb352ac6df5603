"""Data structures returned by the model client and the artifact generator."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.ai.prompts.templates import TemplateKey


class ModelResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    content: str  # first fenced block of the reply, or the whole reply trimmed
    model_id: str = ""
    stop_reason: Optional[str] = None
    raw_text: str = ""


class GenerationRequest(BaseModel):
    dom_content: str
    user_action: str = ""
    page_url: str = ""

    def as_variables(self) -> dict[str, str]:
        """Template variables for this request; empty fields are left out."""
        variables = {"domContent": self.dom_content}
        if self.user_action:
            variables["userAction"] = self.user_action
        if self.page_url:
            variables["pageUrl"] = self.page_url
        return variables


class GeneratedArtifact(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    template_key: TemplateKey
    generator_type: str
    prompt: str
    content: str
    language: Optional[str] = None  # fence tag: typescript, java, gherkin, ...
    model_id: str = ""
