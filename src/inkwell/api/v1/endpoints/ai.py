# src/inkwell/api/v1/endpoints/ai.py
"""AI writing-assistant endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from inkwell.api.v1.dependencies import get_current_user
from inkwell.schemas.ai import AIRequest, AIResponse
from inkwell.services.ai import (
    PROMPTS,
    AIInputError,
    AIProviderError,
    CompletionClient,
    build_messages,
    get_completion_client,
)

router = APIRouter(
    prefix="/ai",
    tags=["ai"],
    dependencies=[Depends(get_current_user)],
)

CompletionClientDep = Annotated[CompletionClient, Depends(get_completion_client)]


async def _run_tool(tool: str, payload: AIRequest, client: CompletionClient) -> AIResponse:
    spec = PROMPTS[tool]
    try:
        messages = build_messages(
            tool,
            topic=payload.topic,
            content=payload.content,
            tone=payload.tone,
        )
    except AIInputError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err

    try:
        text = await client.complete(messages, spec.max_tokens)
    except AIProviderError as err:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": spec.failure_message, "error": str(err)},
        ) from err
    return AIResponse(content=text)


@router.post("/ideas", response_model=AIResponse)
async def generate_ideas(payload: AIRequest, client: CompletionClientDep) -> AIResponse:
    """Brainstorm blog topic ideas, optionally around a topic."""
    return await _run_tool("ideas", payload, client)


@router.post("/title", response_model=AIResponse)
async def generate_titles(payload: AIRequest, client: CompletionClientDep) -> AIResponse:
    """Suggest title variations for a topic."""
    return await _run_tool("title", payload, client)


@router.post("/expand", response_model=AIResponse)
async def expand_content(payload: AIRequest, client: CompletionClientDep) -> AIResponse:
    """Elaborate on draft content."""
    return await _run_tool("expand", payload, client)


@router.post("/grammar", response_model=AIResponse)
async def fix_grammar(payload: AIRequest, client: CompletionClientDep) -> AIResponse:
    """Fix grammar and polish draft content."""
    return await _run_tool("grammar", payload, client)


@router.post("/keywords", response_model=AIResponse)
async def generate_keywords(payload: AIRequest, client: CompletionClientDep) -> AIResponse:
    """Suggest SEO keywords for content or a topic."""
    return await _run_tool("keywords", payload, client)


@router.post("/summarize", response_model=AIResponse)
async def summarize(payload: AIRequest, client: CompletionClientDep) -> AIResponse:
    """Summarize draft content."""
    return await _run_tool("summarize", payload, client)
