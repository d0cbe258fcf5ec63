"""Accessibility signal: share of ``<img>`` tags that carry ``alt``."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from repograde.collectors.base import BaseCollector
from repograde.collectors.schemas import RawSignal
from repograde.constants import (
    ACCESSIBILITY_DEFAULT_SCORE,
    ACCESSIBILITY_NATIVE_MAX,
    SignalName,
    round_half_up,
)
from repograde.ingestion.schemas import RepoTree

logger = logging.getLogger(__name__)

IMG_TAG_RE = re.compile(r"<img\s+[^>]*>", re.IGNORECASE)
ALT_ATTR_RE = re.compile(r"alt=")


def count_images(html: str) -> tuple[int, int]:
    """Return ``(images, missing_alt)`` for one document."""
    tags = IMG_TAG_RE.findall(html)
    missing = sum(1 for tag in tags if not ALT_ATTR_RE.search(tag))
    return len(tags), missing


def compute_accessibility_score(images: int, missing_alt: int) -> int:
    """``round(20 * (1 - missing/images))`` in [0, 20]; 20 with no images."""
    if images <= 0:
        return ACCESSIBILITY_DEFAULT_SCORE
    score = round_half_up(
        ACCESSIBILITY_NATIVE_MAX * (1 - missing_alt / images)
    )
    return min(ACCESSIBILITY_NATIVE_MAX, max(0, score))


def scan_files(files: Iterable[Path]) -> tuple[int, int]:
    """Total ``(images, missing_alt)``; unreadable files are skipped."""
    images = 0
    missing = 0
    for path in files:
        try:
            html = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            logger.warning("event=html_unreadable file=%s", path)
            continue
        found, lacking = count_images(html)
        images += found
        missing += lacking
    return images, missing


class AccessibilityCollector(BaseCollector):
    """Penalises images without alternative text."""

    name = SignalName.ACCESSIBILITY
    native_max = ACCESSIBILITY_NATIVE_MAX
    default_score = ACCESSIBILITY_DEFAULT_SCORE

    async def collect(self, tree: RepoTree) -> RawSignal:
        images, missing = await asyncio.to_thread(
            scan_files, tree.html_files
        )
        details = f"{images} images; {missing} missing alt attributes."
        if images == 0:
            return self.degraded(details)
        return self.measured(
            compute_accessibility_score(images, missing), details
        )
