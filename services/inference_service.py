"""
Inference Service - Completion calls with shrink-and-retry.

When the provider rejects a prompt as too long, the prompt is shrunk (fewer
seeds, or shorter page text) and sent again until it is accepted or a floor
is reached. Attempts are strictly sequential.
"""
import logging
from typing import Optional, Sequence

from core.constants import (
    INFERENCE_PARAMS,
    MIN_SEED_FLOOR,
    MIN_TEXT_FLOOR,
    SUMMARY_PARAMS,
    TEXT_SHRINK_FACTOR,
)
from core.exceptions import PromptTooLargeError, PromptTooLongError
from core.models import NewExample, SeedExample
from .completion_client import BaseCompletionClient
from .prompt_builder import build_inference_prompt, build_summary_prompt

logger = logging.getLogger(__name__)


class InferenceService:
    """Runs element inference and page summaries against completion clients."""

    def __init__(
        self,
        inference_client: BaseCompletionClient,
        summary_client: Optional[BaseCompletionClient] = None
    ):
        """
        Initialize inference service.

        Args:
            inference_client: Client used for few-shot element inference
            summary_client: Client used for page summaries (defaults to
                            inference_client)
        """
        self.inference_client = inference_client
        self.summary_client = summary_client or inference_client

    async def _attempt(self, client: BaseCompletionClient, prompt: str, params: dict) -> Optional[str]:
        """Send one prompt; None means it was rejected as too long."""
        try:
            return await client.complete(prompt, **params)
        except PromptTooLongError:
            return None

    async def infer(
        self,
        seeds: Sequence[SeedExample],
        new_example: NewExample,
        min_seed_floor: int = MIN_SEED_FLOOR
    ) -> str:
        """
        Describe a new example using labeled seeds as context.

        While the prompt is rejected as too long and more than min_seed_floor
        seeds remain, the last seed is dropped and the prompt rebuilt.

        Args:
            seeds: Ordered seed examples; the caller's sequence is not modified
            new_example: Example to describe
            min_seed_floor: Seed count at which shrinking stops

        Returns:
            Completion text

        Raises:
            PromptBuildError: If seeds are empty or unlabeled
            PromptTooLargeError: If the prompt is still too long at the floor
            RemoteServiceError: On any other completion failure
        """
        seeds = list(seeds)
        prompt = build_inference_prompt(seeds, new_example)
        logger.debug("Inference prompt with %d seeds (%d chars)", len(seeds), len(prompt))

        result = await self._attempt(self.inference_client, prompt, INFERENCE_PARAMS)

        while result is None and len(seeds) > min_seed_floor:
            dropped = seeds.pop()
            logger.warning(
                "Prompt too long, dropping seed %s and retrying with %d seeds",
                dropped.id, len(seeds)
            )
            prompt = build_inference_prompt(seeds, new_example)
            result = await self._attempt(self.inference_client, prompt, INFERENCE_PARAMS)

        if result is None:
            raise PromptTooLargeError(
                f"Prompt was still too long even after reducing down to {len(seeds)} seeds"
            )

        return result

    async def summarize(
        self,
        page_title: Optional[str],
        page_text: str,
        min_text_floor: int = MIN_TEXT_FLOOR
    ) -> str:
        """
        Summarize a page in one sentence.

        While the prompt is rejected as too long and the page text is longer
        than min_text_floor characters, the text is cut to 80% of its length.

        Args:
            page_title: Optional page title
            page_text: Extracted page text
            min_text_floor: Text length at which shrinking stops

        Returns:
            Completion text

        Raises:
            PromptTooLargeError: If the prompt is still too long at the floor
            RemoteServiceError: On any other completion failure
        """
        prompt = build_summary_prompt(page_title, page_text)
        result = await self._attempt(self.summary_client, prompt, SUMMARY_PARAMS)

        while result is None and len(page_text) > min_text_floor:
            page_text = page_text[:int(len(page_text) * TEXT_SHRINK_FACTOR)]
            logger.warning("Prompt too long, retrying with %d characters of page text", len(page_text))
            prompt = build_summary_prompt(page_title, page_text)
            result = await self._attempt(self.summary_client, prompt, SUMMARY_PARAMS)

        if result is None:
            raise PromptTooLargeError(
                f"Page text was still too long at {len(page_text)} characters"
            )

        return result
