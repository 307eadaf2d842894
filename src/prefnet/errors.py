# src/prefnet/errors.py

"""
Exception hierarchy for prefnet.

Errors about assignments, tables and nets derive from :class:`PreferenceError`,
and also from the builtin exception whose meaning it refines (``ValueError`` for
bad inputs, ``LookupError`` for missing names, ``RuntimeError`` for nets that
cannot be processed). Callers can therefore catch either family. Plain argument
checks (negative counts or bounds, unknown distribution or config names) raise
a bare ``ValueError``.

Rejected acyclicity-preserving edits and failed learning runs are *not*
errors: they are reported as ``False`` / ``None`` return values.
"""

from __future__ import annotations

__all__ = [
    "PreferenceError",
    "InvalidAssignment",
    "UnboundVariable",
    "UnknownVariable",
    "IncompleteQuery",
    "IllegalTableEdit",
    "DuplicateVariable",
    "IncompleteNet",
    "CyclicNet",
    "StateSizeExceeded",
    "FormatError",
]


class PreferenceError(Exception):
    """Base class for all prefnet errors."""


class InvalidAssignment(PreferenceError, ValueError):
    """An assignment (or an example built from assignments) is malformed."""


class UnboundVariable(PreferenceError, LookupError):
    """An operation needs a variable that the assignment does not bind."""


class UnknownVariable(PreferenceError, LookupError):
    """A variable name was not declared in the preference specification."""


class IncompleteQuery(PreferenceError, ValueError):
    """A CP-table was queried with a condition that misses some parent."""


class IllegalTableEdit(PreferenceError, ValueError):
    """A CP-table edit would break the table's shape or contradict a statement."""


class DuplicateVariable(PreferenceError, ValueError):
    """A variable was declared twice."""


class IncompleteNet(PreferenceError, RuntimeError):
    """A CP-table has no preferred value for an assignment of its parents."""


class CyclicNet(PreferenceError, RuntimeError):
    """Propagation over the parent relation cannot make progress."""


class StateSizeExceeded(PreferenceError, RuntimeError):
    """The outcome space is too large to enumerate."""


class FormatError(PreferenceError, ValueError):
    """A serialized net or example set could not be read."""
