"""AWS Bedrock model client for the test artifact generator."""

from __future__ import annotations

import logging
import re
import threading
import time
from pathlib import Path
from typing import Any, Optional

import anthropic
from botocore.exceptions import BotoCoreError

from src.models.artifact import ModelResponse
from src.models.config import BedrockConfig

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(r"(```[\s\S]*?```)")
FENCE_PATTERN = re.compile(r"^```(?:([\w+#.-]+)?[ \t]*\n)?(.*?)\n?```$", re.DOTALL)

DEFAULT_MAX_TOKENS = 8000

# Exchange logs are only written once a directory has been set
_debug_dir: Path | None = None


def set_debug_dir(path: Path | None) -> None:
    """Set (or clear) the directory for dumping model exchanges."""
    global _debug_dir
    _debug_dir = Path(path) if path is not None else None
    if _debug_dir is not None:
        _debug_dir.mkdir(parents=True, exist_ok=True)


class EndpointInvocationError(RuntimeError):
    """Raised when the model endpoint call fails for any reason."""

    def __init__(self, message: str, model_id: str = ""):
        super().__init__(message)
        self.model_id = model_id


def extract_code_block(text: str) -> str:
    """Return the first ```-fenced block (fences included), else the whole text.

    Only the first block counts; anything after its closing fence is dropped.
    """
    match = CODE_BLOCK_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def fence_language(block: str) -> Optional[str]:
    """Language tag of a fenced block, e.g. ``typescript``, or None."""
    match = FENCE_PATTERN.match(block.strip())
    if match:
        return match.group(1) or None
    return None


def strip_code_fence(block: str) -> str:
    """Remove the surrounding fence (and its language tag) from a block."""
    match = FENCE_PATTERN.match(block.strip())
    if match:
        return match.group(2).strip()
    return block.strip()


def _response_text(response: Any) -> str:
    """Pull the generated text out of an endpoint response.

    Handles both a plain string ``content`` and a list of content blocks.
    """
    content = getattr(response, "content", None)
    if content is None and isinstance(response, dict):
        content = response.get("content")
    if not content:
        return ""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        text = getattr(block, "text", None)
        if text is None and isinstance(block, dict):
            text = block.get("text")
        if text:
            parts.append(text)
    return "".join(parts)


class BedrockClient:
    """Wrapper around the Anthropic Messages API served by AWS Bedrock."""

    def __init__(
        self,
        config: BedrockConfig | None = None,
        default_model_id: str = "",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: Optional[float] = None,
    ):
        self.config = config or BedrockConfig()
        # Credentials are not checked here; a bad config fails on first call
        self.client = anthropic.AnthropicBedrock(
            aws_region=self.config.aws_region,
            aws_access_key=self.config.aws_access_key,
            aws_secret_key=self.config.aws_secret_key,
            aws_session_token=self.config.aws_session_token,
            aws_profile=self.config.aws_profile,
            timeout=self.config.timeout_seconds,
            max_retries=0,
        )
        self.default_model_id = default_model_id
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._call_count = 0
        self._count_lock = threading.Lock()

    @property
    def call_count(self) -> int:
        return self._call_count

    def send_message(
        self,
        prompt: str,
        model_id: Optional[str] = None,
        *,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> ModelResponse:
        """Send ``prompt`` to ``model_id`` and return the extracted reply.

        One round trip, no retries. ``timeout`` (seconds) overrides the
        client default for this call only.
        """
        model_id = model_id or self.default_model_id
        if not model_id:
            raise ValueError("A model identifier is required")
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        with self._count_lock:
            self._call_count += 1
            call_number = self._call_count
        tokens = max_tokens or self.max_tokens
        logger.info(
            "Calling model (call #%d, model=%s, max_tokens=%d)...",
            call_number, model_id, tokens,
        )
        logger.debug("Prompt length: %d chars", len(prompt))

        request: dict[str, Any] = {
            "model": model_id,
            "max_tokens": tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        temperature = temperature if temperature is not None else self.temperature
        if temperature is not None:
            request["temperature"] = temperature
        if timeout is not None:
            request["timeout"] = timeout

        # Request signing raises a bare RuntimeError when no AWS credentials resolve.
        try:
            call_start = time.time()
            response = self.client.messages.create(**request)
        except (anthropic.APIError, BotoCoreError, RuntimeError) as e:
            logger.error("Error calling AWS Bedrock (model=%s): %s", model_id, e)
            self._save_exchange_log(call_number, model_id, prompt, "", str(e))
            raise EndpointInvocationError(
                f"Bedrock invocation failed for {model_id}: {e}", model_id=model_id
            ) from e

        raw_text = _response_text(response)
        stop_reason = getattr(response, "stop_reason", None)
        logger.info("Model response received in %.1fs (%d chars)",
                    time.time() - call_start, len(raw_text))

        if stop_reason == "max_tokens":
            logger.warning(
                "Model response was truncated at max_tokens (%d); "
                "the generated code may be incomplete.",
                tokens,
            )

        self._save_exchange_log(call_number, model_id, prompt, raw_text, None)

        return ModelResponse(
            content=extract_code_block(raw_text),
            model_id=model_id,
            stop_reason=stop_reason,
            raw_text=raw_text,
        )

    @staticmethod
    def _save_exchange_log(
        call_number: int,
        model_id: str,
        prompt: str,
        response_text: str,
        error: str | None,
    ) -> None:
        """Write the full exchange to the debug directory, if one is set."""
        if _debug_dir is None:
            return
        try:
            ts = time.strftime("%Y%m%d_%H%M%S")
            log_file = _debug_dir / f"ai_call_{ts}_{call_number:03d}.log"

            with open(log_file, "w", encoding="utf-8") as f:
                f.write(f"=== MODEL CALL #{call_number} ({model_id}) at "
                        f"{time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")
                f.write(f"=== PROMPT ({len(prompt)} chars) ===\n")
                f.write(prompt)
                f.write(f"\n\n=== RESPONSE ({len(response_text)} chars) ===\n")
                f.write(response_text if response_text else "(empty)")
                if error:
                    f.write(f"\n\n=== ERROR ===\n{error}\n")

            logger.debug("Model exchange logged to %s", log_file)
        except OSError as log_err:
            logger.debug("Failed to save model exchange log: %s", log_err)
