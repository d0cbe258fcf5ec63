"""Rubric configuration: weighted sub-scores."""

from repograde.rubric.loader import load_rubric, parse_rubric
from repograde.rubric.schemas import Rubric, RubricWeight

__all__ = [
    "Rubric",
    "RubricWeight",
    "load_rubric",
    "parse_rubric",
]
