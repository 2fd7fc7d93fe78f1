"""
Purge-then-delete orchestration for a CloudFormation stack.

The stack is listed to exhaustion, its ECR repositories are emptied one after
another, and DeleteStack is issued only if every repository was emptied. A
RemoteError anywhere aborts the run immediately. Per-image failures are
collected across all repositories and reported together, and the stack is
kept.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..errors import CascadePurgeError, RemoteError
from ..events import EventTypes
from ..paging import drain
from .classify import ECR_REPOSITORY_TYPE, classify
from .content import enumerate_content, purge_content
from .models import CascadeResult, RepositoryFailure, RepositoryHandle

logger = logging.getLogger(__name__)

EventCallback = Callable[[str, Dict[str, Any]], None]


class CascadeState(Enum):
    """Stages of a purge run."""
    IDLE = "idle"
    LISTING = "listing"
    CLASSIFYING = "classifying"
    PURGING_REPO = "purging_repo"
    DELETING_PARENT = "deleting_parent"
    DONE = "done"
    FAILED = "failed"
    ABORTED = "aborted"


class CascadeCoordinator:
    """Deletes a stack after emptying the repositories it owns."""

    def __init__(self, stacks, repositories, target_type: str = ECR_REPOSITORY_TYPE,
                 event_callback: Optional[EventCallback] = None):
        self.stacks = stacks
        self.repositories = repositories
        self.target_type = target_type
        self.event_callback = event_callback
        self.state = CascadeState.IDLE

    def _enter(self, state: CascadeState, **detail: Any) -> None:
        logger.debug(f"{self.state.value} -> {state.value} {detail or ''}".rstrip())
        self.state = state

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        if self.event_callback:
            self.event_callback(event_type, data)

    def cascade_delete(self, stack_name: str) -> CascadeResult:
        """
        Empty every ECR repository of a stack, then delete the stack.

        Args:
            stack_name: Stack name or id

        Returns:
            CascadeResult with parent_deleted=True

        Raises:
            CascadePurgeError: If any repository reported undeleted images
            RemoteError: If any remote call failed; nothing further is deleted
        """
        if not stack_name:
            raise ValueError("stack_name must not be empty")

        self._emit(EventTypes.PURGE_START, {"stack_name": stack_name})
        try:
            self._enter(CascadeState.LISTING)
            resources = drain(lambda token: self.stacks.list_member_resources(stack_name, token))
            self._emit(EventTypes.STACK_LISTED, {"stack_name": stack_name, "resources": len(resources)})

            self._enter(CascadeState.CLASSIFYING)
            targets = classify(resources, self.target_type)
            self._emit(EventTypes.REPOS_CLASSIFIED, {"repositories": list(targets)})
            if not targets:
                logger.info(f"Stack {stack_name} has no {self.target_type} resources")

            purged: List[RepositoryHandle] = []
            failures: List[RepositoryFailure] = []
            for index, repository in enumerate(targets):
                self._enter(CascadeState.PURGING_REPO, index=index, repository=repository)
                failed = self._purge_repository(repository)
                if failed:
                    failures.append(RepositoryFailure(repository=repository, failures=tuple(failed)))
                else:
                    purged.append(repository)

            if failures:
                self._enter(CascadeState.FAILED)
                result = CascadeResult(
                    stack_name=stack_name,
                    purged_repositories=tuple(purged),
                    failures=tuple(failures),
                    parent_deleted=False,
                )
                self._emit(EventTypes.PURGE_FAILED, result.to_dict())
                logger.error(f"Not deleting stack {stack_name}: {len(failures)} repositories still hold images")
                raise CascadePurgeError(result)

            self._enter(CascadeState.DELETING_PARENT)
            self.stacks.delete_resource(stack_name)
        except RemoteError as e:
            self._enter(CascadeState.ABORTED)
            self._emit(EventTypes.PURGE_ABORTED, {"stack_name": stack_name, "error": e.to_dict()})
            logger.error(f"Purge of {stack_name} aborted: {e}")
            raise

        self._enter(CascadeState.DONE)
        result = CascadeResult(
            stack_name=stack_name,
            purged_repositories=tuple(purged),
            parent_deleted=True,
        )
        self._emit(EventTypes.STACK_DELETE_REQUESTED, {"stack_name": stack_name})
        return result

    def _purge_repository(self, repository: RepositoryHandle):
        digests = enumerate_content(self.repositories, repository)
        if not digests:
            logger.info(f"{repository} is already empty")
            self._emit(EventTypes.REPO_EMPTY, {"repository": repository})
            return []

        failed = purge_content(self.repositories, repository, digests)
        if failed:
            self._emit(EventTypes.REPO_FAILED, {
                "repository": repository,
                "failures": [f.to_dict() for f in failed],
            })
        else:
            logger.info(f"all images in {repository} successfully deleted")
            self._emit(EventTypes.REPO_PURGED, {"repository": repository, "images": len(digests)})
        return failed
