"""Process-wide logging setup, done in two phases.

Phase 1: setup_logging() runs before anything imports litellm. It
  exports LITELLM_LOG and configures the root logger.

Phase 2: cleanup_third_party_handlers() runs once every import is done
  and drops the StreamHandlers litellm attaches at import time.

Each phase only acts on its first call.
"""

import logging
import os

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Pinned to WARNING so a grading run prints its own events only
_SUPPRESSED_LOGGERS = (
    "LiteLLM",
    "LiteLLM Router",
    "LiteLLM Proxy",
    "openai._base_client",
    "httpx",
    "httpcore",
)

_LITELLM_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy")

_phase1_done = False
_phase2_done = False


def setup_logging(level: str = "INFO") -> None:
    """Phase 1: configure the root logger and litellm's env switch.

    litellm reads LITELLM_LOG when it is first imported, so this has
    to run before ``repograde.text`` is loaded.
    """
    global _phase1_done  # noqa: PLW0603
    if _phase1_done:
        return
    _phase1_done = True

    os.environ.setdefault("LITELLM_LOG", "WARNING")

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_level(level: str) -> None:
    """Change the root level after setup (``--verbose``)."""
    logging.getLogger().setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )


def cleanup_third_party_handlers() -> None:
    """Phase 2: strip litellm's own handlers.

    Without this every litellm record is printed twice, once by its
    handler and once by the root handler it propagates to.
    """
    global _phase2_done  # noqa: PLW0603
    if _phase2_done:
        return
    _phase2_done = True

    for name in _LITELLM_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
