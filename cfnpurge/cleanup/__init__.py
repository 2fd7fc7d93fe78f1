"""
Stack purging: classify stack members, empty repositories, delete the stack.
"""

from .cascade import CascadeCoordinator, CascadeState
from .classify import ECR_REPOSITORY_TYPE, classify
from .content import enumerate_content, purge_content
from .models import (
    CascadeResult,
    PurgeFailure,
    RepositoryFailure,
    StackResourceSummary,
)

__all__ = [
    "CascadeCoordinator",
    "CascadeState",
    "ECR_REPOSITORY_TYPE",
    "classify",
    "enumerate_content",
    "purge_content",
    "CascadeResult",
    "PurgeFailure",
    "RepositoryFailure",
    "StackResourceSummary",
]
