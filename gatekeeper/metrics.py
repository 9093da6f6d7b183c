"""
GATE METRICS
============
Prometheus-backed counters for gate decisions.
"""

from __future__ import annotations

from typing import Dict

from prometheus_client import Counter

from gatekeeper.gate_config import GATE_SETTINGS


_DECISIONS = None


def _enabled() -> bool:
    return bool(GATE_SETTINGS.get("PROMETHEUS_ENABLED", True))


def _init_metrics() -> None:
    global _DECISIONS
    if _DECISIONS is not None or not _enabled():
        return
    _DECISIONS = Counter(
        "gate_decisions_total",
        "Count of access gate decisions",
        ["outcome", "role"],
    )


def record_decision(outcome: str, role: str) -> None:
    _init_metrics()
    if _DECISIONS is None:
        return
    _DECISIONS.labels(outcome=outcome, role=role).inc()


def _counter_value(outcome: str, role: str) -> int:
    return int(_DECISIONS.labels(outcome=outcome, role=role)._value.get())


def get_decision_snapshot(keys: list[tuple[str, str]]) -> Dict[str, int]:
    """Return current counts for (outcome, role) pairs as "outcome:role" keys."""
    _init_metrics()
    snapshot: Dict[str, int] = {}
    for outcome, role in keys:
        snapshot[f"{outcome}:{role}"] = _counter_value(outcome, role) if _DECISIONS is not None else 0
    return snapshot
