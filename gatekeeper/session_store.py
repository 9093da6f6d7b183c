"""
SESSION STORE
=============
Extract the gate's SessionState from a Starlette request.
"""

# FLOW:
# - SessionMiddleware (outer) populates request.scope["session"].
# - lookup() turns it into SessionAbsent / SessionPresent for AccessGate.
# HOW:
# - No session or an empty session -> SessionAbsent("no_session").
# - Session without an account -> SessionAbsent("no_account").
# - Otherwise the account's role code is parsed with Role.from_code().

from __future__ import annotations

from typing import Any, Mapping

from gatekeeper.roles import Role, SessionAbsent, SessionPresent, SessionState

ACCOUNT_KEY = "account"


def _account_role(account: Any) -> Any:
    if isinstance(account, Mapping):
        return account.get("role")
    return getattr(account, "role", None)


class SessionStore:
    def __init__(self, account_key: str = ACCOUNT_KEY):
        self.account_key = account_key

    def lookup(self, request) -> SessionState:
        session = request.scope.get("session")
        if not session:
            return SessionAbsent("no_session")
        account = session.get(self.account_key)
        if account is None:
            return SessionAbsent("no_account")
        return SessionPresent(Role.from_code(_account_role(account)))
