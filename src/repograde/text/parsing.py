"""Read an AI grader reply into a :class:`TextAnalysis`.

The reply is untrusted free text. Parsing starts at the first ``{``
(conversational preamble is tolerated), decodes exactly one JSON value,
then checks it against the strict expected shape. Anything else becomes
a :class:`TextAnalysisError` carrying the reply verbatim.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from repograde.constants import AnalysisSource
from repograde.resilience.errors import TextAnalysisParseError
from repograde.text.schemas import TextAnalysis, TextAnalysisError

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "AI response parse error"

_decoder = json.JSONDecoder()


def extract_analysis(raw: str) -> TextAnalysis:
    """Decode and validate, raising :class:`TextAnalysisParseError`."""
    start = raw.find("{")
    if start < 0:
        raise TextAnalysisParseError("no JSON object in response", raw)

    try:
        data, _end = _decoder.raw_decode(raw, start)
    except json.JSONDecodeError as exc:
        raise TextAnalysisParseError(f"invalid JSON: {exc}", raw) from exc

    if not isinstance(data, dict):
        raise TextAnalysisParseError("response is not an object", raw)

    payload: dict[str, Any] = dict(data)
    payload.pop("source", None)
    try:
        return TextAnalysis.model_validate(
            {**payload, "source": AnalysisSource.LLM}
        )
    except ValidationError as exc:
        raise TextAnalysisParseError(
            f"unexpected shape: {exc.error_count()} field error(s)", raw
        ) from exc


def parse_text_analysis(raw: str) -> TextAnalysis | TextAnalysisError:
    """Never raises: shape mismatches come back as the error variant."""
    try:
        return extract_analysis(raw)
    except TextAnalysisParseError as exc:
        logger.warning(
            "event=text_analysis_parse_failed reason=%s response_len=%d",
            exc,
            len(raw),
        )
        return TextAnalysisError(error=PARSE_ERROR_MESSAGE, raw=exc.raw)
