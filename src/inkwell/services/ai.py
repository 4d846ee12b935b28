"""Writing-assistant proxy for an OpenAI-compatible completion API.

Each assistant tool maps to a fixed system/user prompt pair. The service keeps
no state: it renders the prompt, forwards it to ``/chat/completions`` and
returns the first choice's text. Provider failures surface as
:class:`AIProviderError` and are never retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from inkwell.core.settings import settings

logger = logging.getLogger(__name__)

HTTP_OK = 200


class AIProviderError(RuntimeError):
    """Raised when the completion provider cannot produce a response."""


class AIInputError(ValueError):
    """Raised when a tool is invoked without the text it needs."""


@dataclass(frozen=True)
class PromptSpec:
    """Prompt template and limits for one assistant tool."""

    build: Callable[[str | None, str | None, str], tuple[str, str]]
    max_tokens: int
    failure_message: str


def _ideas(topic: str | None, _content: str | None, tone: str) -> tuple[str, str]:
    system = (
        "You are a creative blog content strategist. "
        f"Generate engaging blog topic ideas in a {tone} tone."
    )
    if topic:
        user = f'Generate 5 unique and engaging blog topic ideas related to: "{topic}"'
    else:
        user = "Generate 5 unique and engaging blog topic ideas for a general audience"
    return system, user


def _title(topic: str | None, _content: str | None, tone: str) -> tuple[str, str]:
    system = (
        "You are an expert headline writer. "
        f"Create catchy, SEO-friendly blog titles in a {tone} tone."
    )
    subject = topic or "general blog post"
    return system, f'Generate 5 compelling blog title variations for the topic: "{subject}"'


def _expand(_topic: str | None, content: str | None, tone: str) -> tuple[str, str]:
    if not content:
        raise AIInputError("Content is required")
    system = (
        "You are a skilled content writer. Expand and elaborate on the given content "
        f"while maintaining a {tone} tone. Add more detail, examples, and depth."
    )
    return system, f'Expand and elaborate on the following content:\n\n"{content}"'


def _grammar(_topic: str | None, content: str | None, _tone: str) -> tuple[str, str]:
    if not content:
        raise AIInputError("Content is required")
    system = (
        "You are a professional editor. Fix grammar, spelling, punctuation, and improve "
        "sentence structure while preserving the original meaning and voice."
    )
    return system, f'Please fix the grammar and polish the following text:\n\n"{content}"'


def _keywords(topic: str | None, content: str | None, _tone: str) -> tuple[str, str]:
    text = content or topic
    if not text:
        raise AIInputError("Content or topic is required")
    system = (
        "You are an SEO expert. Generate relevant keywords and phrases that will help "
        "the content rank well in search engines."
    )
    user = (
        "Generate SEO keywords for the following content. Include primary keywords, "
        f'long-tail keywords, and related terms:\n\n"{text}"'
    )
    return system, user


def _summarize(_topic: str | None, content: str | None, _tone: str) -> tuple[str, str]:
    if not content:
        raise AIInputError("Content is required")
    system = (
        "You are a skilled summarizer. Create concise, clear summaries that capture "
        "the key points and main ideas."
    )
    return system, f'Summarize the following content in a clear and concise manner:\n\n"{content}"'


PROMPTS: dict[str, PromptSpec] = {
    "ideas": PromptSpec(_ideas, 500, "Failed to generate ideas"),
    "title": PromptSpec(_title, 300, "Failed to generate titles"),
    "expand": PromptSpec(_expand, 800, "Failed to expand content"),
    "grammar": PromptSpec(_grammar, 800, "Failed to fix grammar"),
    "keywords": PromptSpec(_keywords, 400, "Failed to generate keywords"),
    "summarize": PromptSpec(_summarize, 300, "Failed to summarize"),
}


def build_messages(
    tool: str,
    *,
    topic: str | None = None,
    content: str | None = None,
    tone: str = "professional",
) -> list[dict[str, str]]:
    """Render the chat messages for `tool`.

    Raises:
        KeyError: If `tool` is not a known assistant tool.
        AIInputError: If the tool's required input is missing.
    """
    system, user = PROMPTS[tool].build(topic, content, tone or "professional")
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


class CompletionClient:
    """Minimal async client for ``POST {base_url}/chat/completions``."""

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        model: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def complete(self, messages: list[dict[str, str]], max_tokens: int) -> str:
        """Return the text of the first completion choice.

        Raises:
            AIProviderError: On missing credentials, transport errors, non-200
                responses or a body without a message.
        """
        if not self.api_key:
            raise AIProviderError("AI provider API key is not configured")

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post("/chat/completions", json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("AI provider request failed: %s", exc)
            raise AIProviderError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code != HTTP_OK:
            detail = _error_message(response)
            logger.warning("AI provider returned %s: %s", response.status_code, detail)
            raise AIProviderError(detail)

        try:
            body = response.json()
            text = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AIProviderError("Malformed response from AI provider") from exc
        if not isinstance(text, str):
            raise AIProviderError("Malformed response from AI provider")
        return text


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"AI provider returned HTTP {response.status_code}"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return f"AI provider returned HTTP {response.status_code}"


_completion_client: CompletionClient | None = None


def get_completion_client() -> CompletionClient:
    """Return the process-wide completion client built from settings."""
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url,
            model=settings.ai_model,
            timeout_seconds=settings.ai_timeout_seconds,
        )
    return _completion_client
