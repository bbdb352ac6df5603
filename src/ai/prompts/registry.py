"""Lookup and variable substitution for the prompt templates."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, Union

from .templates import CODE_GENERATOR_TYPES, DEFAULT_PROMPTS, TemplateKey

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\$\{(\w+)\}")


class TemplateNotFound(KeyError):
    """Raised when a template key is not part of the registry."""

    def __init__(self, key: object):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Prompt not found: {getattr(self.key, 'value', self.key)}"


class MissingTemplateVariables(ValueError):
    """Raised in strict mode when placeholders are left unfilled."""

    def __init__(self, key: TemplateKey, missing: list[str]):
        self.key = key
        self.missing = missing
        super().__init__(
            f"Template {key.value} has unfilled placeholders: {', '.join(missing)}"
        )


class PromptRegistry:
    """Immutable set of prompt templates and their generator-type labels.

    Build it once with :meth:`default` and pass it to whatever needs lookups.
    """

    def __init__(
        self,
        templates: Mapping[TemplateKey, str],
        generator_types: Mapping[TemplateKey, str],
    ):
        missing_labels = set(templates) - set(generator_types)
        if missing_labels:
            raise ValueError(
                f"Templates without a generator type: {sorted(k.value for k in missing_labels)}"
            )
        empty = [k.value for k, text in templates.items() if not text.strip()]
        if empty:
            raise ValueError(f"Empty templates: {empty}")
        self._templates = MappingProxyType(dict(templates))
        self._generator_types = MappingProxyType(dict(generator_types))

    @classmethod
    def default(cls) -> "PromptRegistry":
        return cls(DEFAULT_PROMPTS, CODE_GENERATOR_TYPES)

    def keys(self) -> list[TemplateKey]:
        return list(self._templates)

    def _resolve(self, key: Union[TemplateKey, str]) -> TemplateKey:
        try:
            resolved = TemplateKey(key)
        except ValueError:
            raise TemplateNotFound(key) from None
        if resolved not in self._templates:
            raise TemplateNotFound(key)
        return resolved

    def get_prompt(
        self,
        key: Union[TemplateKey, str],
        variables: Optional[Mapping[str, str]] = None,
        strict: bool = False,
    ) -> str:
        """Fill the template for ``key`` with ``variables`` and trim it.

        Every ``${name}`` occurrence is replaced for each supplied name in a
        single pass over the template, so inserted values are never scanned
        for placeholders themselves. Placeholders with no supplied value stay
        in the text unless ``strict`` is set, in which case
        :class:`MissingTemplateVariables` is raised.
        """
        resolved = self._resolve(key)
        variables = variables or {}

        leftover = sorted(self.placeholders(resolved) - set(variables))
        if leftover:
            if strict:
                raise MissingTemplateVariables(resolved, leftover)
            logger.debug("Prompt %s left unfilled: %s", resolved.value, ", ".join(leftover))

        def fill(match: re.Match) -> str:
            name = match.group(1)
            return str(variables[name]) if name in variables else match.group(0)

        prompt = PLACEHOLDER_PATTERN.sub(fill, self._templates[resolved])
        return prompt.strip()

    def generator_type(self, key: Union[TemplateKey, str]) -> str:
        return self._generator_types[self._resolve(key)]

    def placeholders(self, key: Union[TemplateKey, str]) -> frozenset[str]:
        """Names of the ``${...}`` placeholders declared by a template."""
        return frozenset(PLACEHOLDER_PATTERN.findall(self._templates[self._resolve(key)]))
