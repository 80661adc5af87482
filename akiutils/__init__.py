"""Errors that record where they were made, a terminal logger, IP address
patterns and values, file removal and UNIX socket helpers."""

__version__ = "0.1.0"

__all__ = ["errors", "logger", "ip_patterns", "ip", "osutil", "net"]