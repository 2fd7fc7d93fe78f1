"""
Token-driven pagination over remote list calls.

A lister is any callable taking the previous page's continuation token (None
for the first call) and returning a Page. Pages are requested strictly one
after another; the first error aborts the listing.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a remote listing."""
    items: Tuple[T, ...] = field(default_factory=tuple)
    next_token: Optional[str] = None


PagedLister = Callable[[Optional[str]], Page]


def iter_pages(lister: PagedLister) -> Iterator[Page]:
    """
    Yield pages until the remote side stops returning a continuation token.

    Args:
        lister: Callable fetching one page for a given token

    Yields:
        Pages in the order the remote service returns them
    """
    token: Optional[str] = None
    while True:
        page = lister(token)
        yield page
        if not page.next_token:
            return
        token = page.next_token


def drain(lister: PagedLister) -> List[T]:
    """Collect every item from every page, keeping page order."""
    items: List[T] = []
    for page in iter_pages(lister):
        items.extend(page.items)
    return items
