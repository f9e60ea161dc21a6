"""Shared async Claude wrapper used by the categorizer and the follow-up generator."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, TypeVar

import anthropic
from pydantic import BaseModel

logger = logging.getLogger("trendfeed.llm")

ModelT = TypeVar("ModelT", bound=BaseModel)


class StructuredOutputError(ValueError):
    """Model output could not be parsed into the requested schema."""


@dataclass
class LLMResponse:
    text: str
    input_tokens: int
    output_tokens: int
    model: str


async def call_llm(
    system_prompt: str,
    messages: list[dict[str, Any]],
    model: str = "claude-sonnet-4-5-20250929",
    max_tokens: int = 1024,
    api_key: str = "",
    retries: int = 1,
    temperature: float | None = None,
    top_p: float | None = None,
    top_k: int | None = None,
) -> LLMResponse:
    """Call Claude and return the response text with token usage.

    Sampling parameters are only sent when given. Current Claude models accept
    either ``temperature`` or ``top_p``, not both; when both are given
    ``temperature`` is sent and ``top_p`` is dropped.

    ``retries`` counts total attempts and is the only retry policy: the SDK's
    own retries are disabled. Rate-limit and API errors are retried with
    backoff, the last one is re-raised.
    """
    kwargs: dict = {
        "model": model,
        "max_tokens": max_tokens,
        "system": system_prompt,
        "messages": messages,
    }
    if temperature is not None:
        kwargs["temperature"] = temperature
        if top_p is not None:
            logger.debug(f"Dropping top_p={top_p} for {model}, temperature={temperature} is set")
    elif top_p is not None:
        kwargs["top_p"] = top_p
    if top_k is not None:
        kwargs["top_k"] = top_k

    client = anthropic.AsyncAnthropic(api_key=api_key, max_retries=0)
    async with client:
        for attempt in range(retries):
            try:
                response = await client.messages.create(**kwargs)

                text_parts = [block.text for block in response.content if block.type == "text"]
                return LLMResponse(
                    text="\n".join(text_parts),
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                    model=model,
                )
            except anthropic.RateLimitError:
                if attempt == retries - 1:
                    raise
                wait = 2**attempt * 5
                logger.warning(f"Rate limited, waiting {wait}s (attempt {attempt + 1}/{retries})")
                await asyncio.sleep(wait)
            except anthropic.APIError as e:
                if attempt == retries - 1:
                    raise
                logger.warning(f"API error: {e}, retrying ({attempt + 1}/{retries})")
                await asyncio.sleep(2)

    raise RuntimeError("LLM call failed after all retries")


def parse_json_response(text: str, model_class: type[ModelT]) -> ModelT:
    """Extract JSON from LLM response and parse into a Pydantic model."""
    cleaned = text.strip()

    # Strip markdown code fences
    if "```json" in cleaned:
        cleaned = cleaned.split("```json", 1)[1].split("```", 1)[0].strip()
    elif "```" in cleaned:
        cleaned = cleaned.split("```", 1)[1].split("```", 1)[0].strip()

    # Fallback: find JSON object boundaries if there's extra text
    if cleaned and cleaned[0] != "{":
        start = cleaned.find("{")
        if start == -1:
            raise StructuredOutputError(f"No JSON found in LLM response. First 300 chars: {text[:300]}")
        end = cleaned.rfind("}") + 1
        if end <= start:
            raise StructuredOutputError(f"Incomplete JSON in LLM response. First 300 chars: {text[:300]}")
        cleaned = cleaned[start:end]

    try:
        return model_class.model_validate_json(cleaned)
    except Exception as e:
        raise StructuredOutputError(
            f"Failed to parse LLM response as {model_class.__name__}: {e}\n"
            f"Cleaned text (first 300 chars): {cleaned[:300]}"
        ) from e


def schema_instructions(model_class: type[BaseModel]) -> str:
    """Instructions that pin the reply to ``model_class``'s JSON schema."""
    schema = json.dumps(model_class.model_json_schema(), indent=2)
    return (
        "Respond only with a single JSON object that conforms to this JSON schema:\n"
        f"{schema}\n"
        "Do not wrap it in prose."
    )


async def generate_object(
    model_class: type[ModelT],
    messages: list[dict[str, Any]],
    system_prompt: str = "",
    **llm_kwargs: Any,
) -> ModelT:
    """Call Claude with structured-output instructions and validate the reply.

    Raises ``StructuredOutputError`` when the reply does not satisfy the schema.
    """
    instructions = schema_instructions(model_class)
    full_system = f"{system_prompt}\n\n{instructions}" if system_prompt else instructions
    response = await call_llm(system_prompt=full_system, messages=messages, **llm_kwargs)
    logger.debug(
        f"{model_class.__name__} from {response.model}: {response.input_tokens} in / {response.output_tokens} out"
    )
    return parse_json_response(response.text, model_class)
