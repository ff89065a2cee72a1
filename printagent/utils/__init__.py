"""
Shared utilities for printagent.

Common functionality used across contexts:
- Configuration loading
- Logger setup
- Job event log
- Timestamps
"""

from printagent.utils.config import AgentConfig, ConfigurationError
from printagent.utils.event_logging import JobEventLog
from printagent.utils.timestamp import format_timestamp, now_exact

__all__ = ["AgentConfig", "ConfigurationError", "JobEventLog", "format_timestamp", "now_exact"]
