"""AI advice flows backed by a text generation model."""

import logging
from dataclasses import dataclass
from typing import Protocol

from lunabloom.domain.advice import (
    ChatRequest,
    LifestylePlanRequest,
    MealPlanRequest,
    MenstrualTipsRequest,
)
from lunabloom.services import prompts

CHAT_FALLBACK = "I'm sorry, I couldn't generate a response right now."
LIFESTYLE_FALLBACK = (
    "Could not generate a lifestyle plan at this moment. Please try again later."
)
MEAL_PLAN_FALLBACK = (
    "Could not generate a meal and vitamin plan at this moment. "
    "Please try again later."
)
TIPS_FALLBACK = "Could not generate tips at this moment."

CHAT_DISCLAIMER_KEYWORDS = (
    "medical advice",
    "healthcare provider",
    "doctor",
    "midwife",
    "pediatrician",
    "consult",
    "diagnose",
    "professional",
    "healthcare professional",
)
TIPS_DISCLAIMER_KEYWORDS = ("medical advice", "healthcare provider", "doctor")

_logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Interface for LLM text generation."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        """Return generated text for the prompt."""


@dataclass
class AdviceService:
    """Prompts the model and makes sure every answer carries a disclaimer."""

    client: TextGenerationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def chat(self, request: ChatRequest) -> str:
        """Answer one message in the health visitor chat."""
        text = await self._generate(
            flow="chat",
            instructions=prompts.HEALTH_VISITOR_INSTRUCTIONS,
            prompt=prompts.chat_prompt(request),
            fallback=CHAT_FALLBACK,
        )
        if text == CHAT_FALLBACK or _mentions_any(text, CHAT_DISCLAIMER_KEYWORDS):
            return text
        return f"{text}\n\n**Important Note:** {prompts.CHAT_DISCLAIMER}"

    async def lifestyle_plan(self, request: LifestylePlanRequest) -> str:
        """Generate a weekly lifestyle plan for a pregnancy stage."""
        text = await self._generate(
            flow="lifestyle_plan",
            instructions=prompts.PLAN_INSTRUCTIONS,
            prompt=prompts.lifestyle_plan_prompt(request),
            fallback=LIFESTYLE_FALLBACK,
        )
        return _ensure_exact_disclaimer(text, prompts.LIFESTYLE_DISCLAIMER)

    async def meal_plan(self, request: MealPlanRequest) -> str:
        """Generate a 7-day meal and vitamin plan for a pregnancy week."""
        text = await self._generate(
            flow="meal_plan",
            instructions=prompts.PLAN_INSTRUCTIONS,
            prompt=prompts.meal_plan_prompt(request),
            fallback=MEAL_PLAN_FALLBACK,
        )
        return _ensure_exact_disclaimer(text, prompts.MEAL_PLAN_DISCLAIMER)

    async def menstrual_tips(self, request: MenstrualTipsRequest) -> str:
        """Generate tips for the given cycle phase and symptoms."""
        text = await self._generate(
            flow="menstrual_tips",
            instructions=prompts.TIPS_INSTRUCTIONS,
            prompt=prompts.menstrual_tips_prompt(request),
            fallback=TIPS_FALLBACK,
        )
        if _mentions_any(text, TIPS_DISCLAIMER_KEYWORDS):
            return text
        return f"{text}\n\n**Disclaimer:** {prompts.TIPS_DISCLAIMER}"

    async def _generate(
        self, *, flow: str, instructions: str, prompt: str, fallback: str
    ) -> str:
        try:
            text = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=instructions,
                prompt=prompt,
            )
        except Exception:
            _logger.exception("Advice generation failed", extra={"flow": flow})
            return fallback
        if not text or not text.strip():
            _logger.warning("Advice generation returned no text for %s", flow)
            return fallback
        return text


def _mentions_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def _ensure_exact_disclaimer(text: str, disclaimer: str) -> str:
    if disclaimer in text:
        return text
    return f"{text}\n\n{disclaimer}"
