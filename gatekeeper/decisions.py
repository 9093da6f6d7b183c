"""
GATE DECISIONS
==============
Values returned by AccessGate.evaluate().
"""

# FLOW:
# - AccessGate returns exactly one Decision per request.
# - Dispatcher reads the Decision and performs the redirect or continues.
# HOW:
# - Allow / Redirect are frozen dataclasses compared by value.
# - FlagLocation says where the auth_error marker goes before redirecting.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FlagLocation(str, Enum):
    URL = "url"
    SESSION = "session"
    REQUEST = "request"
    NONE = "none"


class AuthorizationOutcome(str, Enum):
    AUTHORIZED = "authorized"
    UNAUTHENTICATED = "unauthenticated"
    WRONG_ROLE = "wrong_role"
    UNKNOWN_ROLE = "unknown_role"


@dataclass(frozen=True)
class RedirectTarget:
    path: str
    flag: FlagLocation = FlagLocation.NONE


@dataclass(frozen=True)
class Allow:
    outcome: AuthorizationOutcome = AuthorizationOutcome.AUTHORIZED


@dataclass(frozen=True)
class Redirect:
    target: RedirectTarget
    outcome: AuthorizationOutcome

    @property
    def path(self) -> str:
        return self.target.path

    @property
    def flag(self) -> FlagLocation:
        return self.target.flag


Decision = Union[Allow, Redirect]
