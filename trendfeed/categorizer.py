"""Topic categorization through Claude structured output.

Labels are restricted to ``Category``; anything else the model says is a
``ClassificationFailure``. Failures are deliberately not caught here: the
per-locale boundary in the aggregator decides what a failure costs.
"""

from __future__ import annotations

import logging

from trendfeed.config import Settings
from trendfeed.llm import generate_object
from trendfeed.models import CATEGORY_VALUES, Category, CategoryBatch, CategoryLabel

logger = logging.getLogger("trendfeed.categorizer")


class ClassificationFailure(Exception):
    """The classification call failed or returned a label outside the enumeration."""


def build_classification_prompt(topic: str) -> str:
    return (
        f"Give the category for the topic from the existing values only in lowercase only: {topic}\n"
        "\n"
        f"Existing values: {', '.join(CATEGORY_VALUES)}\n"
        "\n"
        "- if the topic category isn't present in the list, please select 'trending' only!"
    )


def build_batch_prompt(topics: list[str]) -> str:
    numbered = "\n".join(f"{i}. {topic}" for i, topic in enumerate(topics, 1))
    return (
        "Give the category for each topic below from the existing values only in lowercase only.\n"
        "Return exactly one category per topic, in the same order as the topics.\n"
        "\n"
        f"Existing values: {', '.join(CATEGORY_VALUES)}\n"
        "\n"
        f"Topics:\n{numbered}\n"
        "\n"
        "- if a topic's category isn't present in the list, please select 'trending' only!"
    )


async def classify_title(title: str, settings: Settings) -> Category:
    """Classify one topic title into a ``Category``."""
    try:
        label = await generate_object(
            CategoryLabel,
            messages=[{"role": "user", "content": build_classification_prompt(title)}],
            model=settings.classifier_model,
            max_tokens=64,
            api_key=settings.anthropic_api_key,
            retries=settings.llm_retries,
            temperature=0,
        )
    except Exception as e:
        raise ClassificationFailure(f"Could not classify {title!r}: {e}") from e
    return label.category


async def classify_titles_batch(titles: list[str], settings: Settings) -> list[Category]:
    """Classify all titles in one call; labels come back in input order."""
    if not titles:
        return []
    try:
        batch = await generate_object(
            CategoryBatch,
            messages=[{"role": "user", "content": build_batch_prompt(titles)}],
            model=settings.classifier_model,
            max_tokens=32 * len(titles) + 64,
            api_key=settings.anthropic_api_key,
            retries=settings.llm_retries,
            temperature=0,
        )
    except Exception as e:
        raise ClassificationFailure(f"Could not classify batch of {len(titles)} topics: {e}") from e

    if len(batch.categories) != len(titles):
        raise ClassificationFailure(
            f"Expected {len(titles)} categories, got {len(batch.categories)}"
        )
    logger.info(f"Classified {len(titles)} topics in one batch")
    return batch.categories
