"""AI text analysis with a primary → fallback model chain."""

from __future__ import annotations

import logging

from circuitbreaker import CircuitBreakerError

from repograde.config import TextScoringConfig
from repograde.prompts import build_text_messages
from repograde.resilience.errors import classify_error
from repograde.text._llm_call import guarded_llm_call
from repograde.text.parsing import parse_text_analysis
from repograde.text.schemas import TextAnalysis, TextAnalysisError

logger = logging.getLogger(__name__)


async def analyze_text(
    text: str,
    config: TextScoringConfig,
    *,
    role_hint: str | None = None,
    file_label: str = "",
) -> TextAnalysis | TextAnalysisError | None:
    """Ask the configured models to grade ``text``.

    Returns ``None`` when the AI path is disabled or every model
    failed, which tells the caller to use the heuristic. A reply that
    arrives but cannot be parsed is returned as the error variant.
    """
    if not config.use_llm:
        return None

    messages = build_text_messages(text, role_hint or config.role_hint)

    for model, api_key in config.models:
        try:
            result = await guarded_llm_call(
                model,
                messages,
                config.timeout_seconds,
                api_key=api_key,
                max_tokens=config.max_output_tokens,
            )
        except CircuitBreakerError:
            logger.warning(
                "event=circuit_open model=%s file=%s",
                model,
                file_label,
            )
            continue
        except Exception as exc:
            logger.warning(
                "event=text_analysis_failed model=%s file=%s"
                " error_class=%s",
                model,
                file_label,
                classify_error(exc).value,
                exc_info=True,
            )
            continue

        logger.debug(
            "event=text_analysis_done model=%s file=%s"
            " input_tokens=%d output_tokens=%d",
            model,
            file_label,
            result.input_tokens,
            result.output_tokens,
        )
        return parse_text_analysis(result.content)

    return None
