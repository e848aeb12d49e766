# src/sprout_community/services/__init__.py
"""Business logic services for the Sprout Community application."""

from .aggregation import PostQueryService
from .comments import CommentThread
from .moderation import ModerationService
from .votes import VoteLedger

__all__ = [
    "CommentThread",
    "ModerationService",
    "PostQueryService",
    "VoteLedger",
]
