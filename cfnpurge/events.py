"""
Event logging utilities for NDJSON format.
"""

import json
from datetime import datetime
from typing import Any, Dict, List

from .state import get_run_dir


def emit_event(run_id: str, event_type: str, data: Dict[str, Any]) -> None:
    """
    Append an event to the run's events.ndjson file.

    Args:
        run_id: Run ID
        event_type: Event type (e.g., "PURGE_START", "REPO_PURGED")
        data: Event data
    """
    events_file = get_run_dir(run_id) / "events.ndjson"
    event = {
        "ts": datetime.now().isoformat(),
        "type": event_type,
        "data": data,
    }
    with open(events_file, "a") as f:
        f.write(json.dumps(event) + "\n")
        f.flush()


def read_events(run_id: str) -> List[Dict[str, Any]]:
    """
    Read all events of a run. Malformed lines are skipped.
    """
    events_file = get_run_dir(run_id) / "events.ndjson"
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return events


class EventTypes:
    PURGE_START = "PURGE_START"
    STACK_LISTED = "STACK_LISTED"
    REPOS_CLASSIFIED = "REPOS_CLASSIFIED"
    REPO_EMPTY = "REPO_EMPTY"
    REPO_PURGED = "REPO_PURGED"
    REPO_FAILED = "REPO_FAILED"
    STACK_DELETE_REQUESTED = "STACK_DELETE_REQUESTED"
    PURGE_FAILED = "PURGE_FAILED"
    PURGE_ABORTED = "PURGE_ABORTED"
