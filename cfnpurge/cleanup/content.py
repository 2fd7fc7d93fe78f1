"""
Listing and deleting the images held by one repository.
"""

import logging
from typing import List, Sequence

from ..paging import drain
from .models import ContentIdentifier, PurgeFailure, RepositoryHandle

logger = logging.getLogger(__name__)


def enumerate_content(repositories, repository: RepositoryHandle) -> List[ContentIdentifier]:
    """
    Return every image digest in a repository, page by page.

    Args:
        repositories: Service exposing list_content(repository, token)
        repository: Repository to list

    Returns:
        Digests in page order; empty if the repository holds nothing
    """
    digests = drain(lambda token: repositories.list_content(repository, token))
    logger.debug(f"{repository}: {len(digests)} images")
    return digests


def purge_content(repositories, repository: RepositoryHandle,
                  identifiers: Sequence[ContentIdentifier]) -> List[PurgeFailure]:
    """
    Bulk delete images from a repository.

    An empty identifier list is a no-op; the remote API rejects empty requests.
    RemoteError from the service is not caught here.

    Returns:
        The images the service reported as not deleted
    """
    if not identifiers:
        return []
    failures = list(repositories.bulk_delete_content(repository, list(identifiers)))
    for f in failures:
        logger.warning(f"{repository}: could not delete {f.identifier} ({f.code}): {f.reason}")
    return failures
