"""
Prompt assembly for element inference and page summaries.
"""
from typing import Optional, Sequence

from core.constants import PROMPT_PREAMBLE, PROMPT_SEPARATOR, SUMMARY_PREAMBLE
from core.exceptions import EmptySeedListError, UnlabeledSeedError
from core.models import NewExample, SeedExample


def validate_seeds(seeds: Sequence[SeedExample]) -> None:
    """
    Check seeds can be used as prompt examples.

    Raises:
        EmptySeedListError: If seeds is empty
        UnlabeledSeedError: If any seed has no label
    """
    if not seeds:
        raise EmptySeedListError()

    for seed in seeds:
        if seed.label is None:
            raise UnlabeledSeedError(seed.id)


def build_inference_prompt(
    seeds: Sequence[SeedExample],
    new_example: NewExample,
    preamble: str = PROMPT_PREAMBLE
) -> str:
    """
    Build a few-shot prompt from labeled seeds and one unlabeled example.

    Seeds are rendered in the order given. The prompt ends with the new
    example's open label line.

    Args:
        seeds: Labeled seed examples, at least one
        new_example: Example to describe
        preamble: Instruction placed before the examples

    Returns:
        The prompt string

    Raises:
        EmptySeedListError: If seeds is empty
        UnlabeledSeedError: If any seed has no label
    """
    validate_seeds(seeds)

    return (
        preamble
        + PROMPT_SEPARATOR
        + ''.join(seed.render() for seed in seeds)
        + new_example.render()
    )


def build_summary_prompt(page_title: Optional[str], page_text: str) -> str:
    """Build the one-sentence page summary prompt."""
    prompt = SUMMARY_PREAMBLE
    if page_title is not None:
        prompt += f"Title:\n{page_title}\n"
    prompt += f"Text:\n{page_text}\n"
    prompt += "Summary:\n"
    return prompt
