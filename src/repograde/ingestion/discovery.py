"""Find the HTML and markdown artifacts a grading run looks at."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pathspec

from repograde.config import Settings
from repograde.ingestion.schemas import RepoTree

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"
TEXT_SUFFIX = ".md"


def discover(root: Path, settings: Settings | None = None) -> RepoTree:
    """Scan ``root`` and return a :class:`RepoTree`."""
    if settings is None:
        settings = Settings()
    root = root.resolve()
    spec = (
        _load_gitignore(root)
        if settings.respect_gitignore
        else _empty_spec()
    )
    tree = RepoTree(
        root=root,
        html_files=discover_html_files(
            root, set(settings.skip_directories), spec
        ),
        text_files=discover_text_files(root, settings.text_directories),
    )
    logger.info(
        "event=discovery_complete root=%s html=%d text=%d",
        root,
        len(tree.html_files),
        len(tree.text_files),
    )
    return tree


def discover_text_files(
    root: Path, directories: Iterable[str]
) -> list[Path]:
    """List ``*.md`` files directly inside each text directory.

    Not recursive. Missing directories are ignored.
    """
    files: list[Path] = []
    for name in directories:
        directory = root / name
        if not directory.is_dir():
            continue
        files.extend(
            sorted(
                p
                for p in directory.iterdir()
                if p.is_file() and p.name.endswith(TEXT_SUFFIX)
            )
        )
    return files


def discover_html_files(
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec | None = None,
) -> list[Path]:
    """Walk the whole tree for ``*.html`` files.

    Uses an explicit stack instead of recursion. Directories named in
    ``skip_dirs`` are pruned, and symlinks that resolve outside the
    root are skipped.
    """
    spec = gitignore_spec or _empty_spec()
    resolved_root = root.resolve()
    found: list[Path] = []
    stack: list[Path] = [root]
    visited: set[Path] = set()

    while stack:
        current = stack.pop()
        try:
            real = current.resolve()
            entries = sorted(current.iterdir(), reverse=True)
        except (OSError, RuntimeError):
            logger.warning("event=discovery_unreadable dir=%s", current)
            continue
        if real in visited:
            continue
        visited.add(real)
        for item in entries:
            try:
                kind = _classify(item, resolved_root)
            except (OSError, RuntimeError):
                # symlink loops raise RuntimeError on 3.12
                logger.warning("event=discovery_skipped path=%s", item)
                continue
            rel = item.relative_to(root).as_posix()
            if kind == "dir":
                if item.name in skip_dirs:
                    continue
                if spec.match_file(rel + "/"):
                    continue
                stack.append(item)
            elif kind == "file" and item.name.endswith(HTML_SUFFIX):
                if not spec.match_file(rel):
                    found.append(item)

    return sorted(found)


def _classify(item: Path, resolved_root: Path) -> str | None:
    """Entry kind for the walk; None for entries it does not follow."""
    if item.is_symlink() and not item.resolve(strict=True).is_relative_to(
        resolved_root
    ):
        return None
    if item.is_dir():
        return "dir"
    if item.is_file():
        return "file"
    return None


def _empty_spec() -> pathspec.PathSpec:
    return pathspec.PathSpec.from_lines("gitwildmatch", [])


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return _empty_spec()
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitwildmatch", f)
    except OSError:
        return _empty_spec()
