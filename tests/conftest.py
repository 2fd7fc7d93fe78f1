"""
Scripted stand-ins for the CloudFormation and ECR services.
"""

import pytest

from cfnpurge.cleanup.models import PurgeFailure, StackResourceSummary
from cfnpurge.paging import Page


class FakeStackService:
    """Returns scripted ListStackResources pages keyed by continuation token."""

    def __init__(self, pages, calls, list_error=None, delete_error=None):
        self.pages = pages
        self.calls = calls
        self.list_error = list_error
        self.delete_error = delete_error

    def list_member_resources(self, stack_name, token=None):
        self.calls.append(("list_member_resources", stack_name, token))
        if self.list_error:
            raise self.list_error
        return self.pages[token]

    def delete_resource(self, stack_name):
        self.calls.append(("delete_resource", stack_name))
        if self.delete_error:
            raise self.delete_error


class FakeRepositoryService:
    """Returns scripted DescribeImages pages and BatchDeleteImage failures per repository."""

    def __init__(self, content, calls, failures=None, list_errors=None, delete_errors=None):
        self.content = content
        self.calls = calls
        self.failures = failures or {}
        self.list_errors = list_errors or {}
        self.delete_errors = delete_errors or {}

    def list_content(self, repository, token=None):
        self.calls.append(("list_content", repository, token))
        if repository in self.list_errors:
            raise self.list_errors[repository]
        return self.content[repository][token]

    def bulk_delete_content(self, repository, identifiers):
        self.calls.append(("bulk_delete_content", repository, list(identifiers)))
        if repository in self.delete_errors:
            raise self.delete_errors[repository]
        return list(self.failures.get(repository, []))


@pytest.fixture
def count_calls():
    """Number of recorded calls to an operation."""

    def _count(calls, op):
        return sum(1 for c in calls if c[0] == op)

    return _count


@pytest.fixture
def calls():
    return []


@pytest.fixture
def foo_pages():
    """Two pages: cluster + ecr1, then ecr2 + queue."""
    return {
        None: Page(
            items=(
                StackResourceSummary("cluster", "AWS::ECS::Cluster"),
                StackResourceSummary("ecr1", "AWS::ECR::Repository"),
            ),
            next_token="next_token",
        ),
        "next_token": Page(
            items=(
                StackResourceSummary("ecr2", "AWS::ECR::Repository"),
                StackResourceSummary("queue", "AWS::SQS::Queue"),
            ),
            next_token=None,
        ),
    }


@pytest.fixture
def foo_content():
    """ecr1 holds two pages of images, ecr2 is empty."""
    return {
        "ecr1": {
            None: Page(items=("foofoofoo", "barbarbar"), next_token="next_token"),
            "next_token": Page(items=("foobarfoobar", "barfoobarfoo"), next_token=None),
        },
        "ecr2": {
            None: Page(items=(), next_token=None),
        },
    }


@pytest.fixture
def make_services(calls, foo_pages, foo_content):
    """Build (stacks, repositories) fakes for stack "foo", with optional overrides."""

    def _make(pages=None, content=None, **kw):
        stack_kw = {k: kw.pop(k) for k in ("list_error", "delete_error") if k in kw}
        stacks = FakeStackService(pages if pages is not None else foo_pages, calls, **stack_kw)
        repositories = FakeRepositoryService(content if content is not None else foo_content, calls, **kw)
        return stacks, repositories

    return _make


@pytest.fixture
def image_failure():
    return PurgeFailure(identifier="barbarbar", code="ImageNotFound", reason="Requested image not found")
