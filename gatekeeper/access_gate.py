"""
ACCESS GATE
===========
Role-based routing decision for guarded areas.

FLOW:
- evaluate() receives the SessionState extracted by SessionStore and the
  AreaTag from PathClassifier.
- No session -> login with the auth_error flag on the URL.
- Customer -> allowed through.
- Any other role -> that role's home page, flag attached where the rule says.
- Unrecognized role -> login, no flag.

HOW:
- One read-only rule table per AreaTag, built once and shared.
- evaluate() is pure: no I/O, no logging, no mutation of its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from gatekeeper.decisions import (
    Allow,
    AuthorizationOutcome,
    Decision,
    FlagLocation,
    Redirect,
    RedirectTarget,
)
from gatekeeper.errors import GateConfigurationError
from gatekeeper.path_classifier import AreaTag
from gatekeeper.roles import Role, SessionAbsent, SessionPresent, SessionState

LOGIN_PATH = "/login"


@dataclass(frozen=True)
class RoutingRule:
    role: Role
    target: Optional[RedirectTarget] = None

    @property
    def allows(self) -> bool:
        return self.target is None


CUSTOMER_AREA_RULES = (
    RoutingRule(Role.CUSTOMER),
    RoutingRule(Role.STAFF, RedirectTarget("/orders", FlagLocation.SESSION)),
    RoutingRule(Role.MANAGER, RedirectTarget("/manager/home", FlagLocation.REQUEST)),
    RoutingRule(Role.ADMIN, RedirectTarget("/admin/accounts", FlagLocation.REQUEST)),
)

DEFAULT_RULES = {AreaTag.CUSTOMER_AREA: CUSTOMER_AREA_RULES}

UNAUTHENTICATED_REDIRECT = Redirect(
    RedirectTarget(LOGIN_PATH, FlagLocation.URL),
    AuthorizationOutcome.UNAUTHENTICATED,
)
UNKNOWN_ROLE_REDIRECT = Redirect(
    RedirectTarget(LOGIN_PATH, FlagLocation.NONE),
    AuthorizationOutcome.UNKNOWN_ROLE,
)
KNOWN_ROLES = tuple(role for role in Role if role is not Role.UNKNOWN)


def build_rule_table(rules) -> Mapping[Role, RoutingRule]:
    """Index rules by role and check the table covers every known role."""
    table: dict[Role, RoutingRule] = {}
    for rule in rules:
        if rule.role is Role.UNKNOWN:
            raise GateConfigurationError("Role.UNKNOWN always routes to login and cannot have a rule")
        if rule.role in table:
            raise GateConfigurationError(f"duplicate rule for role {rule.role.value}")
        table[rule.role] = rule

    missing = [role.value for role in KNOWN_ROLES if role not in table]
    if missing:
        raise GateConfigurationError(f"no rule for roles: {', '.join(missing)}")

    targets = [rule.target.path for rule in table.values() if not rule.allows]
    if len(targets) != len(set(targets)):
        raise GateConfigurationError("redirect targets must be distinct per role")
    return MappingProxyType(table)


class AccessGate:
    """Stateless evaluator; safe to share across concurrent requests."""

    def __init__(self, rules: Optional[Mapping[AreaTag, tuple]] = None):
        rules = DEFAULT_RULES if rules is None else rules
        missing = [area.value for area in AreaTag if area not in rules]
        if missing:
            raise GateConfigurationError(f"no rule table for areas: {', '.join(missing)}")
        self._tables = MappingProxyType(
            {area: build_rule_table(area_rules) for area, area_rules in rules.items()}
        )

    def rules_for(self, area: AreaTag = AreaTag.CUSTOMER_AREA) -> Mapping[Role, RoutingRule]:
        return self._tables[area]

    def evaluate(self, session: SessionState, area: AreaTag = AreaTag.CUSTOMER_AREA) -> Decision:
        if isinstance(session, SessionAbsent):
            return UNAUTHENTICATED_REDIRECT
        if not isinstance(session, SessionPresent) or not isinstance(session.role, Role):
            return UNKNOWN_ROLE_REDIRECT

        table = self._tables.get(area)
        rule = table.get(session.role) if table is not None else None
        if rule is None:
            return UNKNOWN_ROLE_REDIRECT
        if rule.allows:
            return Allow()
        return Redirect(rule.target, AuthorizationOutcome.WRONG_ROLE)


_default_gate: Optional[AccessGate] = None


def evaluate(session: SessionState, area: AreaTag = AreaTag.CUSTOMER_AREA) -> Decision:
    """Evaluate against the default customer-area rule table."""
    global _default_gate
    if _default_gate is None:
        _default_gate = AccessGate()
    return _default_gate.evaluate(session, area)
