"""
Shared helpers for reading captured message logs.
"""

import json
from typing import Any, List, Optional


def read_messages(log_path: str) -> List[str]:
    """
    Read one raw message per line, skipping blank lines.

    Raises:
        FileNotFoundError: If log_path does not exist
    """
    messages = []
    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                messages.append(line)
    return messages


def parse_json_option(value: Optional[str], name: str) -> Any:
    """
    Parse a JSON-valued command-line option.

    Raises:
        ValueError: If value is not valid JSON
    """
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError as e:
        raise ValueError(f"--{name} is not valid JSON: {e}") from e
