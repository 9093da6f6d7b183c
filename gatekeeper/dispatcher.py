"""
DISPATCHER
==========
Acts on AccessGate decisions.

FLOW:
- Allow -> the request continues down the middleware chain unchanged.
- Redirect -> the auth_error marker is attached where the decision says,
  then a redirect to context path + target is returned.

HOW:
- URL flag: "auth_error=true" appended to the redirect query string.
- SESSION flag: request.session["auth_error"] = "true".
- REQUEST flag: request.state.auth_error = "true".
- A target that is not an absolute path, or a session that refuses the
  marker, raises GateDispatchError.
"""

from __future__ import annotations

from urllib.parse import urlencode

from fastapi.responses import RedirectResponse

from gatekeeper.decisions import Allow, Decision, FlagLocation, Redirect
from gatekeeper.errors import GateDispatchError
from gatekeeper.gate_config import GATE_SETTINGS

FLAG_VALUE = "true"


class Dispatcher:
    def __init__(
        self,
        context_path: str | None = None,
        status_code: int | None = None,
        flag_name: str | None = None,
    ):
        self.context_path = GATE_SETTINGS["GATE_CONTEXT_PATH"] if context_path is None else context_path
        self.status_code = status_code or GATE_SETTINGS["GATE_REDIRECT_STATUS"]
        self.flag_name = flag_name or GATE_SETTINGS["GATE_AUTH_ERROR_PARAM"]

    def resolve_context_path(self, request) -> str:
        if self.context_path:
            return self.context_path
        return (request.scope.get("root_path") or "").rstrip("/")

    def redirect_url(self, request, decision: Redirect) -> str:
        if not decision.path.startswith("/"):
            raise GateDispatchError(f"redirect target must be an absolute path: {decision.path!r}")
        url = self.resolve_context_path(request) + decision.path
        if decision.flag is FlagLocation.URL:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode({self.flag_name: FLAG_VALUE})}"
        return url

    def attach_flag(self, request, decision: Redirect) -> None:
        if decision.flag is FlagLocation.SESSION:
            # Starlette only persists the session when SessionMiddleware wraps the gate
            if "session" not in request.scope:
                return
            try:
                request.session[self.flag_name] = FLAG_VALUE
            except TypeError as exc:
                raise GateDispatchError("session does not accept the auth_error marker") from exc
        elif decision.flag is FlagLocation.REQUEST:
            setattr(request.state, self.flag_name, FLAG_VALUE)

    def redirect(self, request, decision: Redirect) -> RedirectResponse:
        url = self.redirect_url(request, decision)
        self.attach_flag(request, decision)
        return RedirectResponse(url, status_code=self.status_code)

    async def dispatch(self, request, decision: Decision, call_next):
        if isinstance(decision, Allow):
            return await call_next(request)
        return self.redirect(request, decision)
