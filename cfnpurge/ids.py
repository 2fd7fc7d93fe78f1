"""
Purge run ID generation utilities.
"""

import random
import string
from datetime import datetime


def new_run_id() -> str:
    """
    Generate a new run ID in format: p-YYYYMMDD-hhmmss-XXXX

    Returns:
        str: Unique run ID
    """
    now = datetime.now()
    random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=4))
    return f"p-{now.strftime('%Y%m%d')}-{now.strftime('%H%M%S')}-{random_suffix}"


def is_valid_run_id(run_id: str) -> bool:
    """
    Validate run ID format.

    Args:
        run_id: ID to validate

    Returns:
        bool: True if valid format
    """
    parts = run_id.split("-")
    if len(parts) != 4 or parts[0] != "p":
        return False

    _, date_part, time_part, suffix = parts
    if len(date_part) != 8 or not date_part.isdigit():
        return False
    if len(time_part) != 6 or not time_part.isdigit():
        return False
    if len(suffix) != 4 or not all(c in string.ascii_lowercase + string.digits for c in suffix):
        return False
    return True
