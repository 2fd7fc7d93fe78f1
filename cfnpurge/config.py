"""
Settings resolved from command line values and the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

ECR_REPOSITORY_TYPE = "AWS::ECR::Repository"

DEFAULT_HOME = ".cfnpurge"
DEFAULT_PAGE_SIZE = 1000


@dataclass(frozen=True)
class Settings:
    profile: Optional[str] = None
    region: Optional[str] = None
    home: str = DEFAULT_HOME
    page_size: int = DEFAULT_PAGE_SIZE
    target_type: str = ECR_REPOSITORY_TYPE


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def load_settings(profile: Optional[str] = None, region: Optional[str] = None) -> Settings:
    """
    Build Settings. Explicit arguments win over environment variables.

    Raises:
        ValueError: If CFNPURGE_PAGE_SIZE is not a positive integer
    """
    page_size = os.environ.get("CFNPURGE_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))
    try:
        page_size_value = int(page_size)
    except ValueError:
        raise ValueError(f"CFNPURGE_PAGE_SIZE must be an integer, got {page_size!r}")
    if page_size_value <= 0:
        raise ValueError(f"CFNPURGE_PAGE_SIZE must be positive, got {page_size_value}")

    return Settings(
        profile=profile or _first_env("CFNPURGE_PROFILE", "AWS_PROFILE"),
        region=region or _first_env("CFNPURGE_REGION", "AWS_REGION", "AWS_DEFAULT_REGION"),
        home=os.environ.get("CFNPURGE_HOME", DEFAULT_HOME),
        page_size=page_size_value,
    )


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    if not verbose:
        for name in ("boto3", "botocore", "urllib3"):
            logging.getLogger(name).setLevel(logging.WARNING)
