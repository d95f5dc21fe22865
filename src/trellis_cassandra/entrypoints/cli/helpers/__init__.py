"""CLI helpers for trellis-cassandra.

Message emitters that write to stderr with emoji to ASCII fallbacks, and the
parser for per-logger level options.
"""

from .log_level_parser import parse_log_level
from .messages import error, success, warn

__all__ = ["error", "parse_log_level", "success", "warn"]
