"""
boto3-backed stack and repository services.

Both services translate botocore exceptions into RemoteError so the purge logic
only has one remote failure type to deal with.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from .cleanup.models import ContentIdentifier, PurgeFailure, StackResourceSummary
from .config import DEFAULT_PAGE_SIZE
from .errors import RemoteError
from .paging import Page

logger = logging.getLogger(__name__)

# BatchDeleteImage accepts at most 100 image ids per request.
BATCH_DELETE_LIMIT = 100


@contextmanager
def remote_call(operation: str) -> Iterator[None]:
    """Re-raise botocore errors from the wrapped call as RemoteError."""
    try:
        yield
    except ClientError as e:
        error = e.response.get("Error", {})
        raise RemoteError(
            error.get("Code", "Unknown"),
            error.get("Message", str(e)),
            operation,
        ) from e
    except BotoCoreError as e:
        raise RemoteError(type(e).__name__, str(e), operation) from e


class StackService:
    """CloudFormation operations needed to purge a stack."""

    def __init__(self, client):
        self.client = client

    def list_member_resources(self, stack_name: str, token: Optional[str] = None) -> Page:
        params = {"StackName": stack_name}
        if token:
            params["NextToken"] = token
        with remote_call("ListStackResources"):
            response = self.client.list_stack_resources(**params)

        resources = []
        for r in response.get("StackResourceSummaries", []):
            # Resources that failed to create have no physical id and nothing to purge.
            if not r.get("PhysicalResourceId"):
                logger.debug(f"Skipping {r.get('LogicalResourceId')}: no physical id ({r.get('ResourceStatus')})")
                continue
            resources.append(StackResourceSummary(
                physical_id=r["PhysicalResourceId"],
                resource_type=r.get("ResourceType", ""),
            ))
        return Page(items=tuple(resources), next_token=response.get("NextToken"))

    def delete_resource(self, stack_name: str) -> None:
        logger.info(f"Deleting stack {stack_name}")
        with remote_call("DeleteStack"):
            self.client.delete_stack(StackName=stack_name)


class RepositoryService:
    """ECR operations needed to empty a repository."""

    def __init__(self, client, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def list_content(self, repository: str, token: Optional[str] = None) -> Page:
        params = {"repositoryName": repository, "maxResults": self.page_size}
        if token:
            params["nextToken"] = token
        with remote_call("DescribeImages"):
            response = self.client.describe_images(**params)

        digests = tuple(
            d["imageDigest"] for d in response.get("imageDetails", []) if d.get("imageDigest")
        )
        return Page(items=digests, next_token=response.get("nextToken"))

    def bulk_delete_content(self, repository: str, identifiers: Sequence[ContentIdentifier]) -> List[PurgeFailure]:
        """
        Delete images by digest and return the ones ECR refused to delete.

        Args:
            repository: Repository name
            identifiers: Image digests, must not be empty

        Returns:
            Failures reported by ECR; empty on full success

        Raises:
            ValueError: If identifiers is empty
            RemoteError: If a request itself fails
        """
        if not identifiers:
            raise ValueError("identifiers must not be empty")

        failures: List[PurgeFailure] = []
        for i in range(0, len(identifiers), BATCH_DELETE_LIMIT):
            chunk = identifiers[i:i + BATCH_DELETE_LIMIT]
            logger.debug(f"BatchDeleteImage {repository}: {len(chunk)} images")
            with remote_call("BatchDeleteImage"):
                response = self.client.batch_delete_image(
                    repositoryName=repository,
                    imageIds=[{"imageDigest": d} for d in chunk],
                )
            for f in response.get("failures", []):
                image_id = f.get("imageId", {})
                failures.append(PurgeFailure(
                    identifier=image_id.get("imageDigest") or image_id.get("imageTag", ""),
                    code=f.get("failureCode", "Unknown"),
                    reason=f.get("failureReason", ""),
                ))
        return failures
