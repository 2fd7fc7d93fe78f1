"""
Selection of content-bearing stack members.
"""

from typing import Iterable, List

from ..config import ECR_REPOSITORY_TYPE
from .models import RepositoryHandle, StackResourceSummary


def classify(resources: Iterable[StackResourceSummary], target_type: str = ECR_REPOSITORY_TYPE) -> List[RepositoryHandle]:
    """
    Keep the physical ids of resources whose type is exactly target_type.

    Input order is preserved. No match yields an empty list.
    """
    return [r.physical_id for r in resources if r.resource_type == target_type]
