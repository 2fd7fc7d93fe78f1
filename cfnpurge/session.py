"""
boto3 session and service construction.
"""

import logging
from typing import Optional, Tuple

import boto3

from .clients import RepositoryService, StackService, remote_call
from .config import Settings

logger = logging.getLogger(__name__)


def create_session(profile: Optional[str] = None, region: Optional[str] = None) -> boto3.Session:
    """Create a session, leaving unset values to the default credential chain."""
    params = {}
    if profile:
        params["profile_name"] = profile
    if region:
        params["region_name"] = region
    logger.debug(f"Creating boto3 session with {params or 'default settings'}")
    return boto3.Session(**params)


def build_services(settings: Settings) -> Tuple[StackService, RepositoryService]:
    """
    Build both services from one session.

    Raises:
        RemoteError: If the profile is unknown or no region is configured
    """
    with remote_call("CreateSession"):
        session = create_session(settings.profile, settings.region)
        cloudformation = session.client("cloudformation")
        ecr = session.client("ecr")
    return (
        StackService(cloudformation),
        RepositoryService(ecr, page_size=settings.page_size),
    )
