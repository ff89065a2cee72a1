"""
Job event logging utilities.

Appends one JSON Lines record per job state transition to the job event log
(logs/job_events.log). This is the structured counterpart to the loguru
output: tests and tooling filter it by job_id or event_type instead of
matching log text.

Usage:
    from printagent.utils.event_logging import JobEventLog

    events = JobEventLog(Path("logs/job_events.log"))
    events.log("detected", job_id=None, source_file="queue/job1.json")
    events.log("printed", job_id="INV-001", source_file="queue/job1.json", printer="TM-T20")
"""

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional

from printagent.utils.timestamp import now_exact


class JobEventLog:
    """Append-only JSON Lines log of job lifecycle events."""

    def __init__(self, events_file: Path):
        self.events_file = Path(events_file)
        self._lock = threading.Lock()

    def log(self, event_type: str, job_id: Optional[str], source_file: str, **extra_fields) -> Dict:
        """
        Append an event to the job event log.

        Args:
            event_type: Type of event (e.g., "detected", "rendered", "print_failed")
            job_id: Job identity (None before the job is parsed)
            source_file: Path of the job descriptor file
            **extra_fields: Additional event-specific fields

        Returns:
            The event record that was written
        """
        event = {
            "timestamp": now_exact(),
            "event_type": event_type,
            "job_id": job_id,
            "source_file": source_file,
            **extra_fields,
        }

        line = json.dumps(event, default=str) + "\n"
        with self._lock:
            self.events_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.events_file, "a", encoding="utf-8") as f:
                f.write(line)

        return event

    def read_all(self) -> List[Dict]:
        """Read every event in the log, skipping malformed lines."""
        if not self.events_file.exists():
            return []

        events = []
        with open(self.events_file, "r", encoding="utf-8") as f:
            for line in f:
                try:
                    events.append(json.loads(line.strip()))
                except json.JSONDecodeError:
                    # Skip malformed lines
                    continue
        return events

    def get_recent_events(
        self, n: int = 10, job_id: Optional[str] = None, event_type: Optional[str] = None
    ) -> List[Dict]:
        """
        Get the last n events from the log, optionally filtered.

        Args:
            n: Number of recent events to return (default: 10)
            job_id: Filter to only events for this job (optional)
            event_type: Filter to only events of this type (optional)

        Returns:
            List of event dicts (most recent last)

        Example:
            # Last 20 print failures
            events = event_log.get_recent_events(20, event_type="print_failed")
        """
        events = self.read_all()

        if job_id:
            events = [e for e in events if e.get("job_id") == job_id]

        if event_type:
            events = [e for e in events if e.get("event_type") == event_type]

        return events[-n:] if len(events) > n else events
