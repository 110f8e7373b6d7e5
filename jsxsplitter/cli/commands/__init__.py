"""
CLI command handlers.

Organized by functional domain:
- split.py: Component extraction and selection inspection commands
- config.py: Configuration commands
"""

from .config import cmd_config
from .split import cmd_inspect, cmd_split, format_inspection_result, format_split_result

__all__ = [
    "cmd_config",
    "cmd_inspect",
    "cmd_split",
    "format_inspection_result",
    "format_split_result",
]
