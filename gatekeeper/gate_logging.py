"""
GATE LOGGING
============
Structured decision logging for the customer-area gate.

FLOW:
- The gate middleware logs one line per gated request.
- The pure AccessGate never logs.

HOW:
- Writes key=value lines to a rotating file (logs/gate.log by default).
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from gatekeeper.decisions import Allow, Decision
from gatekeeper.gate_config import GATE_SETTINGS
from gatekeeper.roles import SessionPresent, SessionState

LOGGER_NAME = "gatekeeper.access"


def get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    log_file = GATE_SETTINGS["GATE_LOG_FILE"]
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)

    logger.setLevel(GATE_SETTINGS["GATE_LOG_LEVEL"])
    logger.addHandler(handler)
    return logger


def role_label(session: SessionState) -> str:
    if isinstance(session, SessionPresent):
        return getattr(session.role, "value", str(session.role))
    return "anonymous"


def log_decision(logger: logging.Logger, path: str, session: SessionState, decision: Decision) -> None:
    if isinstance(decision, Allow):
        logger.info(
            "outcome=%s role=%s path=%s",
            decision.outcome.value,
            role_label(session),
            path,
        )
        return
    logger.warning(
        "outcome=%s role=%s path=%s target=%s flag=%s",
        decision.outcome.value,
        role_label(session),
        path,
        decision.path,
        decision.flag.value,
    )
