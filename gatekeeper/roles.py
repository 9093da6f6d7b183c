"""
ROLES & SESSION STATE
=====================
Closed role set and the per-request session snapshot seen by the gate.
"""

# FLOW:
# - SessionStore builds a SessionState per request.
# - Role.from_code() maps stored account role codes onto the closed enum.
# HOW:
# - Numeric codes 1..4 map to Customer/Staff/Manager/Admin.
# - Anything else becomes Role.UNKNOWN, parsing never raises.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union


class Role(str, Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    MANAGER = "manager"
    ADMIN = "admin"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, value: Any) -> "Role":
        """Map an account role (numeric code or name) to a Role."""
        if isinstance(value, Role):
            return value
        # bool is an int subclass; True must not read as code 1
        if isinstance(value, bool) or value is None:
            return cls.UNKNOWN
        if isinstance(value, int):
            return ROLE_CODES.get(value, cls.UNKNOWN)
        if isinstance(value, str):
            raw = value.strip()
            if raw.isdigit():
                return ROLE_CODES.get(int(raw), cls.UNKNOWN)
            try:
                role = cls(raw.lower())
            except ValueError:
                return cls.UNKNOWN
            return role
        return cls.UNKNOWN


ROLE_CODES = {
    1: Role.CUSTOMER,
    2: Role.STAFF,
    3: Role.MANAGER,
    4: Role.ADMIN,
}

AbsentReason = Literal["no_session", "no_account"]


@dataclass(frozen=True)
class SessionAbsent:
    reason: AbsentReason = "no_session"


@dataclass(frozen=True)
class SessionPresent:
    role: Role


SessionState = Union[SessionAbsent, SessionPresent]
