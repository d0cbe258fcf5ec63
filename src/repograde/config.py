"""Environment-based configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from repograde.constants import DEFAULT_ROLE_HINT

logger = logging.getLogger(__name__)

# Provider prefix (litellm "provider/model") → Settings attribute
_PROVIDER_KEYS: dict[str, str] = {
    "openai": "openai_api_key",
    "anthropic": "anthropic_api_key",
}


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # LLM Provider (optional, absence selects the offline heuristic)
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Model chain (first = primary, rest = fallbacks tried in order)
    litellm_model_chain: Annotated[list[str], NoDecode] = [
        "openai/gpt-4o-mini",
    ]
    llm_max_concurrency: int = 2
    llm_timeout_seconds: int = 60
    llm_max_output_tokens: int = 600

    # External tools
    htmlhint_command: Annotated[list[str], NoDecode] = [
        "npx",
        "htmlhint",
    ]
    markdownlint_command: Annotated[list[str], NoDecode] = [
        "npx",
        "markdownlint",
    ]
    tool_timeout_seconds: float = 60
    git_timeout_seconds: float = 10
    collector_timeout_seconds: float = 300

    # Rubric / output
    rubric_path: Path = Path("rubric.json")
    output_filename: str = "grading.json"

    # Discovery
    text_directories: list[str] = ["articles", "posts", "content"]
    skip_directories: list[str] = [
        "node_modules",
        ".git",
        ".github",
    ]
    respect_gitignore: bool = False

    # Logging
    log_level: str = "INFO"

    @field_validator(
        "litellm_model_chain",
        "htmlhint_command",
        "markdownlint_command",
        mode="before",
    )
    @classmethod
    def _split_words(cls, v: Any) -> Any:
        """Accept a comma- or space-separated string as well as a list."""
        if isinstance(v, str):
            sep = "," if "," in v else None
            return [s.strip() for s in v.split(sep) if s.strip()]
        return v

    @field_validator("litellm_model_chain")
    @classmethod
    def _validate_chain(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "litellm_model_chain must contain at least one model"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for m in v:
            if m in seen:
                dupes.append(m)
            seen.add(m)
        if dupes:
            logger.warning(
                "Duplicate models in LITELLM_MODEL_CHAIN: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("htmlhint_command", "markdownlint_command")
    @classmethod
    def _validate_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("tool command must not be empty")
        return v

    def api_key_for(self, model: str) -> str:
        """Credential for a ``provider/model`` string ('' when unset)."""
        provider = model.split("/", 1)[0] if "/" in model else "openai"
        attr = _PROVIDER_KEYS.get(provider)
        return str(getattr(self, attr, "")) if attr else ""

    @property
    def credentialed_models(self) -> list[str]:
        """Models in the chain that have a credential configured."""
        return [
            m for m in self.litellm_model_chain if self.api_key_for(m)
        ]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }


@dataclass(frozen=True)
class TextScoringConfig:
    """Run-wide text scoring choice, fixed before any collector starts.

    ``models`` pairs each usable model with its credential. Empty means
    the AI path is never attempted.
    """

    models: tuple[tuple[str, str], ...] = field(default=(), repr=False)
    timeout_seconds: int = 60
    max_concurrency: int = 2
    max_output_tokens: int = 600
    role_hint: str = DEFAULT_ROLE_HINT

    @property
    def use_llm(self) -> bool:
        return bool(self.models)

    @classmethod
    def from_settings(cls, settings: Settings) -> TextScoringConfig:
        models = tuple(
            (m, settings.api_key_for(m))
            for m in settings.credentialed_models
        )
        return cls(
            models=models,
            timeout_seconds=settings.llm_timeout_seconds,
            max_concurrency=max(1, settings.llm_max_concurrency),
            max_output_tokens=settings.llm_max_output_tokens,
        )
