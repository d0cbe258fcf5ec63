"""repograde: rubric-weighted grading of student repositories."""

__version__ = "0.1.0"
