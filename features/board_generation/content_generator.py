"""
Affirmation and image prompt generation.

Everything here is a pure function of its inputs: the same description,
goals and style always produce the same affirmations and prompts.
"""

from __future__ import annotations

from itertools import cycle, islice
from typing import Sequence

from core.catalog import (
    BASE_AFFIRMATIONS,
    BASE_PROMPT_TEMPLATES,
    GOAL_AFFIRMATION_TEMPLATE,
    GOAL_PROMPT_TEMPLATE,
    MAX_AFFIRMATIONS,
    MAX_GOAL_AFFIRMATIONS,
    VisionBoardStyle,
)


def _clean_goals(goals: Sequence[str]) -> list[str]:
    """Strip whitespace and drop blank goals, preserving order."""
    return [goal.strip() for goal in goals if goal and goal.strip()]


def style_prefix(style: VisionBoardStyle) -> str:
    return style.prompt_prefix


def style_affirmation(style: VisionBoardStyle) -> str:
    return style.info.affirmation


def base_prompts(style: VisionBoardStyle) -> list[str]:
    prefix = style_prefix(style)
    return [template.format(prefix=prefix) for template in BASE_PROMPT_TEMPLATES]


def generate_affirmations(
    description: str,
    goals: Sequence[str],
    style: VisionBoardStyle,
) -> list[str]:
    """
    Build up to five affirmations.

    Order: one per goal for the first three goals, then the style's own
    affirmation, then the generic base affirmations, truncated to five.
    The description does not change the text; it is accepted so richer
    generators can share this signature.
    """
    affirmations = [
        GOAL_AFFIRMATION_TEMPLATE.format(goal=goal.lower())
        for goal in _clean_goals(goals)[:MAX_GOAL_AFFIRMATIONS]
    ]
    affirmations.append(style_affirmation(style))
    affirmations.extend(BASE_AFFIRMATIONS)
    return affirmations[:MAX_AFFIRMATIONS]


def generate_image_prompts(
    description: str,
    goals: Sequence[str],
    style: VisionBoardStyle,
    count: int,
) -> list[str]:
    """
    Build exactly `count` image prompts.

    The first floor(count / 2) slots are reserved for goal prompts, consumed
    in goal order. Slots a short goal list cannot fill are not held open:
    everything after the goal prompts comes from the base prompt list,
    starting at its first entry and cycling if more are needed.
    """
    if count <= 0:
        return []

    prefix = style_prefix(style)
    prompts = [
        GOAL_PROMPT_TEMPLATE.format(prefix=prefix, goal=goal.lower())
        for goal in _clean_goals(goals)[: count // 2]
    ]
    remaining = count - len(prompts)
    prompts.extend(islice(cycle(base_prompts(style)), remaining))
    return prompts


class ContentGenerator:
    """Injectable wrapper around the pure generation functions."""

    def generate_affirmations(
        self,
        description: str,
        goals: Sequence[str],
        style: VisionBoardStyle,
    ) -> list[str]:
        return generate_affirmations(description, goals, style)

    def generate_image_prompts(
        self,
        description: str,
        goals: Sequence[str],
        style: VisionBoardStyle,
        count: int,
    ) -> list[str]:
        return generate_image_prompts(description, goals, style, count)
