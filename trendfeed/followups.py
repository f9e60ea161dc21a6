"""Follow-up search question generation from a conversation history.

Server-side only: reached through ``POST /api/followups`` and the CLI, never
from client code, since it needs the Anthropic key.
"""

from __future__ import annotations

import logging
from typing import Any

from trendfeed.config import Settings
from trendfeed.llm import generate_object
from trendfeed.models import GeneratedQuestions

logger = logging.getLogger("trendfeed.followups")

FOLLOWUP_SYSTEM_PROMPT = """You are a search engine query generator. You 'have' to create only '3' questions for the search engine based on the message history which has been provided to you.
The questions should be open-ended and should encourage further discussion while maintaining the whole context. Limit it to 5-10 words per question.
Always put the user input's context is some way so that the next search knows what to search for exactly.
Try to stick to the context of the conversation and avoid asking questions that are too general or too specific.
For weather based converations sent to you, always generate questions that are about news, sports, or other topics that are not related to the weather.
For programming based conversations, always generate questions that are about the algorithms, data structures, or other topics that are related to it or an improvement of the question.
For location based conversations, always generate questions that are about the culture, history, or other topics that are related to the location.
For the translation based conversations, always generate questions that may continue the conversation or ask for more information or translations.
Do not use pronouns like he, she, him, his, her, etc. in the questions as they blur the context. Always use the proper nouns from the context."""

TEMPERATURE = 1
MAX_TOKENS = 300
TOP_P = 0.95
TOP_K = 40


async def generate_trending_queries(history: list[dict[str, Any]], settings: Settings) -> GeneratedQuestions:
    """Ask Claude for three follow-up questions; the output is returned unmodified."""
    if not history:
        raise ValueError("history must contain at least one message")

    logger.debug(f"Generating follow-ups from {len(history)} messages")
    generated = await generate_object(
        GeneratedQuestions,
        messages=history,
        system_prompt=FOLLOWUP_SYSTEM_PROMPT,
        model=settings.followup_model,
        max_tokens=MAX_TOKENS,
        api_key=settings.anthropic_api_key,
        retries=settings.llm_retries,
        temperature=TEMPERATURE,
        top_p=TOP_P,
        top_k=TOP_K,
    )
    return GeneratedQuestions(questions=generated.questions)
