"""
CUSTOMER AREA GATE MIDDLEWARE
=============================
Guards /customer/*, /shoppingCart and /WishlistController by session role.
"""

# FLOW:
# - PathClassifier decides whether the request targets a guarded area.
# - SessionStore extracts the SessionState, AccessGate decides.
# - Dispatcher continues or redirects; the decision is logged and counted.
# - A GateError while redirecting becomes a masked 500, never a pass-through.
# HOW:
# - Must be registered inside SessionMiddleware so request.session exists.

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware

from gatekeeper.access_gate import AccessGate
from gatekeeper.dispatcher import Dispatcher
from gatekeeper.error_handling import gate_error_response
from gatekeeper.errors import GateError
from gatekeeper.gate_config import GATE_SETTINGS
from gatekeeper.gate_logging import get_logger, log_decision, role_label
from gatekeeper.metrics import record_decision
from gatekeeper.path_classifier import PathClassifier
from gatekeeper.session_store import SessionStore


class CustomerAreaGateMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        gate: AccessGate | None = None,
        classifier: PathClassifier | None = None,
        store: SessionStore | None = None,
        dispatcher: Dispatcher | None = None,
        enabled: bool | None = None,
        debug: bool | None = None,
    ):
        super().__init__(app)
        self.gate = gate or AccessGate()
        self.classifier = classifier or PathClassifier()
        self.store = store or SessionStore()
        self.dispatcher = dispatcher or Dispatcher()
        self.enabled = GATE_SETTINGS["GATE_ENABLED"] if enabled is None else enabled
        self.debug = GATE_SETTINGS["GATE_DEBUG"] if debug is None else debug
        self.logger = get_logger()
        if self.debug:
            self.logger.setLevel(logging.DEBUG)
            self.logger.debug("CustomerAreaGate: initializing")

    async def dispatch(self, request, call_next):
        if not self.enabled:
            return await call_next(request)

        path = request.url.path
        area = self.classifier.classify(path, self.dispatcher.resolve_context_path(request))
        if area is None:
            return await call_next(request)

        if self.debug:
            self.logger.debug("CustomerAreaGate:dispatch() path=%s", path)

        session = self.store.lookup(request)
        decision = self.gate.evaluate(session, area)
        log_decision(self.logger, path, session, decision)
        record_decision(decision.outcome.value, role_label(session))
        try:
            return await self.dispatcher.dispatch(request, decision, call_next)
        except GateError as exc:
            return gate_error_response(request, exc, role_label(session))
