"""Post-processing helpers for generated READMEs."""

from .badges import BadgeManager

__all__ = ["BadgeManager"]
