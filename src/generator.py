"""Turns a DOM snippet and a user action into generated test artifacts."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from typing import Optional, Union

from src.ai.client import BedrockClient, fence_language
from src.ai.prompts.registry import PromptRegistry
from src.ai.prompts.templates import TemplateKey
from src.models.artifact import GeneratedArtifact, GenerationRequest
from src.models.config import GeneratorConfig

logger = logging.getLogger(__name__)


class ArtifactGenerator:
    """Fills a prompt template and asks the model for the artifact."""

    def __init__(
        self,
        config: GeneratorConfig,
        registry: PromptRegistry,
        client: BedrockClient,
    ):
        self.config = config
        self.registry = registry
        self.client = client

    def build_prompt(self, key: Union[TemplateKey, str], request: GenerationRequest) -> str:
        return self.registry.get_prompt(
            key, request.as_variables(), strict=self.config.strict_variables
        )

    def generate(
        self,
        key: Union[TemplateKey, str],
        request: GenerationRequest,
        timeout: Optional[float] = None,
    ) -> GeneratedArtifact:
        """Generate one artifact. Template and endpoint errors propagate."""
        generator_type = self.registry.generator_type(key)
        prompt = self.build_prompt(key, request)
        logger.info("Generating %s (%d chars of DOM)", generator_type, len(request.dom_content))

        response = self.client.send_message(
            prompt,
            self.config.model_id,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            timeout=timeout,
        )

        return GeneratedArtifact(
            template_key=TemplateKey(key),
            generator_type=generator_type,
            prompt=prompt,
            content=response.content,
            language=fence_language(response.content),
            model_id=response.model_id,
        )

    def generate_many(
        self,
        keys: Iterable[Union[TemplateKey, str]],
        request: GenerationRequest,
        timeout: Optional[float] = None,
    ) -> list[GeneratedArtifact]:
        """Generate several artifacts concurrently, returned in ``keys`` order."""
        return asyncio.run(self._generate_many(list(keys), request, timeout))

    async def _generate_many(
        self,
        keys: list[Union[TemplateKey, str]],
        request: GenerationRequest,
        timeout: Optional[float],
    ) -> list[GeneratedArtifact]:
        # Resolve every key up front so a bad one fails before any call is made
        for key in keys:
            self.registry.generator_type(key)

        start = time.time()
        semaphore = asyncio.Semaphore(max(1, self.config.max_parallel_requests))

        async def _run_one(index: int, key: Union[TemplateKey, str]) -> GeneratedArtifact:
            async with semaphore:
                logger.info("Running generator [%d/%d]: %s",
                            index + 1, len(keys), self.registry.generator_type(key))
                return await asyncio.to_thread(self.generate, key, request, timeout)

        artifacts = list(await asyncio.gather(
            *(_run_one(i, key) for i, key in enumerate(keys))
        ))
        logger.info("Generated %d artifacts in %.1fs", len(artifacts), time.time() - start)
        return artifacts
