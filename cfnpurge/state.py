"""
Local state for purge runs.
"""

from pathlib import Path
from typing import List

from .config import load_settings
from .ids import is_valid_run_id


def get_home() -> Path:
    """Directory holding one subdirectory per purge run."""
    return Path(load_settings().home).resolve()


def get_run_dir(run_id: str) -> Path:
    """
    Get the directory for a specific run.

    Raises:
        ValueError: If run ID is invalid
    """
    if not is_valid_run_id(run_id):
        raise ValueError(f"Invalid run ID: {run_id}")
    return get_home() / run_id


def create_run_dir(run_id: str) -> Path:
    run_dir = get_run_dir(run_id)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def list_runs() -> List[str]:
    """List recorded run IDs, oldest first."""
    home = get_home()
    if not home.exists():
        return []
    return sorted(p.name for p in home.iterdir() if p.is_dir() and is_valid_run_id(p.name))
