"""
Data models for stack purging.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

# Physical id of a stack member known to be an ECR repository.
RepositoryHandle = str
# Image digest inside a repository.
ContentIdentifier = str


@dataclass(frozen=True)
class StackResourceSummary:
    """A member resource of a CloudFormation stack."""
    physical_id: str
    resource_type: str  # e.g. "AWS::ECR::Repository", "AWS::SQS::Queue"


@dataclass(frozen=True)
class PurgeFailure:
    """An image the bulk delete reported as not deleted."""
    identifier: ContentIdentifier
    code: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"identifier": self.identifier, "code": self.code, "reason": self.reason}


@dataclass(frozen=True)
class RepositoryFailure:
    """All purge failures reported for one repository."""
    repository: RepositoryHandle
    failures: Tuple[PurgeFailure, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repository": self.repository,
            "failures": [f.to_dict() for f in self.failures],
        }


@dataclass(frozen=True)
class CascadeResult:
    """Outcome of one purge-then-delete run for a stack."""
    stack_name: str
    purged_repositories: Tuple[RepositoryHandle, ...] = field(default_factory=tuple)
    failures: Tuple[RepositoryFailure, ...] = field(default_factory=tuple)
    parent_deleted: bool = False

    @property
    def ok(self) -> bool:
        return self.parent_deleted and not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stack_name": self.stack_name,
            "purged_repositories": list(self.purged_repositories),
            "failures": [f.to_dict() for f in self.failures],
            "parent_deleted": self.parent_deleted,
        }
