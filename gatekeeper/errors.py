"""Exceptions raised while wiring the access gate."""

from __future__ import annotations


class GateError(Exception):
    """Base class for access gate errors."""


class GateConfigurationError(GateError):
    """A routing rule table is incomplete or inconsistent."""


class GateDispatchError(GateError):
    """A redirect decision could not be turned into a response."""
