"""LLM prompts for AI text grading."""

from repograde.constants import (
    TEXT_FACTUAL_MAX,
    TEXT_LANGUAGE_MAX,
    TEXT_ORIGINALITY_MAX,
    TEXT_REFERENCES_MAX,
    TEXT_STRUCTURE_MAX,
)

GRADER_SYSTEM_PROMPT = "You are an academic grader."

TEXT_GRADING_PROMPT = f"""\
You are an objective academic grader. Evaluate the following student \
{{role_hint}} according to these rubrics:

1) Factual accuracy (0-{TEXT_FACTUAL_MAX})
2) Structure & clarity (0-{TEXT_STRUCTURE_MAX})
3) References & citations (0-{TEXT_REFERENCES_MAX})
4) Language & ethics (0-{TEXT_LANGUAGE_MAX})
5) Originality (0-{TEXT_ORIGINALITY_MAX})

Provide JSON output: {{{{ "factual": int, "structure": int, \
"references": int, "language": int, "originality": int, \
"feedback": string }}}}

Text:
{{text}}"""


def build_text_prompt(text: str, role_hint: str) -> str:
    """Fill the grading prompt for one text artifact."""
    return TEXT_GRADING_PROMPT.format(role_hint=role_hint, text=text)


def build_text_messages(
    text: str, role_hint: str
) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": GRADER_SYSTEM_PROMPT},
        {"role": "user", "content": build_text_prompt(text, role_hint)},
    ]
