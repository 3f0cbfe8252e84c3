"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from RerenderUserError.

Programming errors and bugs should NOT inherit from RerenderUserError —
they will propagate with full tracebacks. Template errors raised by Jinja2
are reported by the CLI as they are and are never wrapped.
"""

from __future__ import annotations


class RerenderUserError(Exception):
    """
    Base class for all user-facing errors in rerender.

    These errors indicate problems that the user can fix:
    configuration issues, unreadable data files, unknown plugins, etc.
    """
    pass


__all__ = ["RerenderUserError"]
