"""
Field name mapping between storage (snake_case) and wire (camelCase).
"""

import re
from typing import Any, Dict

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def snake_to_camel(name: str) -> str:
    """Convert ``allocated_seats`` to ``allocatedSeats``."""
    head, *tail = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in tail)


def camel_to_snake(name: str) -> str:
    """Convert ``allocatedSeats`` to ``allocated_seats``."""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def to_snake_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with snake_case keys."""
    return {camel_to_snake(key): value for key, value in data.items()}


def to_camel_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with camelCase keys."""
    return {snake_to_camel(key): value for key, value in data.items()}
