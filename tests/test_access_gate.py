from concurrent.futures import ThreadPoolExecutor

import pytest

from gatekeeper import access_gate
from gatekeeper.access_gate import AccessGate, RoutingRule, build_rule_table
from gatekeeper.decisions import (
    Allow,
    AuthorizationOutcome,
    FlagLocation,
    Redirect,
    RedirectTarget,
)
from gatekeeper.errors import GateConfigurationError
from gatekeeper.path_classifier import AreaTag
from gatekeeper.roles import Role, SessionAbsent, SessionPresent


@pytest.fixture
def gate():
    return AccessGate()


def test_customer_is_allowed(gate):
    decision = gate.evaluate(SessionPresent(Role.CUSTOMER), AreaTag.CUSTOMER_AREA)
    assert decision == Allow()
    assert decision.outcome is AuthorizationOutcome.AUTHORIZED


@pytest.mark.parametrize("reason", ["no_session", "no_account"])
def test_absent_session_redirects_to_login_with_url_flag(gate, reason):
    decision = gate.evaluate(SessionAbsent(reason))
    assert decision == Redirect(RedirectTarget("/login", FlagLocation.URL), AuthorizationOutcome.UNAUTHENTICATED)


@pytest.mark.parametrize(
    "role, path, flag",
    [
        (Role.STAFF, "/orders", FlagLocation.SESSION),
        (Role.MANAGER, "/manager/home", FlagLocation.REQUEST),
        (Role.ADMIN, "/admin/accounts", FlagLocation.REQUEST),
    ],
)
def test_other_roles_redirect_to_their_home(gate, role, path, flag):
    decision = gate.evaluate(SessionPresent(role))
    assert isinstance(decision, Redirect)
    assert decision.path == path
    assert decision.flag is flag
    assert decision.outcome is AuthorizationOutcome.WRONG_ROLE


def test_redirect_targets_are_pairwise_distinct(gate):
    targets = [gate.evaluate(SessionPresent(role)).path for role in (Role.STAFF, Role.MANAGER, Role.ADMIN)]
    assert len(set(targets)) == 3


def test_unknown_role_redirects_to_login_without_flag(gate):
    decision = gate.evaluate(SessionPresent(Role.UNKNOWN))
    assert decision == Redirect(RedirectTarget("/login", FlagLocation.NONE), AuthorizationOutcome.UNKNOWN_ROLE)


@pytest.mark.parametrize("session", [SessionPresent(99), SessionPresent(None), SessionPresent([]), None, "customer"])
def test_malformed_sessions_still_get_a_decision(gate, session):
    decision = gate.evaluate(session)
    assert decision.path == "/login"
    assert decision.flag is FlagLocation.NONE


def test_numeric_role_99_scenario(gate):
    decision = gate.evaluate(SessionPresent(Role.from_code(99)))
    assert decision.path == "/login"
    assert decision.flag is FlagLocation.NONE


def test_evaluation_is_deterministic(gate):
    sessions = [SessionAbsent(), *(SessionPresent(role) for role in Role)]
    first = [gate.evaluate(session) for session in sessions]
    second = [gate.evaluate(session) for session in sessions]
    assert first == second
    assert [AccessGate().evaluate(session) for session in sessions] == first


def test_every_role_reaches_a_decision(gate):
    for role in Role:
        assert isinstance(gate.evaluate(SessionPresent(role)), (Allow, Redirect))


def test_evaluate_does_not_mutate_session(gate):
    session = SessionPresent(Role.MANAGER)
    gate.evaluate(session)
    assert session == SessionPresent(Role.MANAGER)


def test_module_level_evaluate_uses_default_table():
    assert access_gate.evaluate(SessionPresent(Role.CUSTOMER)) == Allow()
    assert access_gate.evaluate(SessionPresent(Role.ADMIN)).path == "/admin/accounts"


def test_rule_table_is_read_only(gate):
    rules = gate.rules_for(AreaTag.CUSTOMER_AREA)
    assert rules[Role.CUSTOMER].allows
    with pytest.raises(TypeError):
        rules[Role.CUSTOMER] = RoutingRule(Role.CUSTOMER, RedirectTarget("/elsewhere"))


def test_custom_rules_are_used():
    rules = access_gate.CUSTOMER_AREA_RULES[:-1] + (
        RoutingRule(Role.ADMIN, RedirectTarget("/admin/dashboard", FlagLocation.URL)),
    )
    gate = AccessGate({AreaTag.CUSTOMER_AREA: rules})
    decision = gate.evaluate(SessionPresent(Role.ADMIN))
    assert decision.path == "/admin/dashboard"
    assert decision.flag is FlagLocation.URL


def test_missing_role_rule_is_rejected():
    with pytest.raises(GateConfigurationError, match="admin"):
        build_rule_table(access_gate.CUSTOMER_AREA_RULES[:-1])


def test_duplicate_targets_are_rejected():
    rules = access_gate.CUSTOMER_AREA_RULES[:-1] + (
        RoutingRule(Role.ADMIN, RedirectTarget("/orders", FlagLocation.REQUEST)),
    )
    with pytest.raises(GateConfigurationError, match="distinct"):
        build_rule_table(rules)


def test_duplicate_role_is_rejected():
    rules = access_gate.CUSTOMER_AREA_RULES + (RoutingRule(Role.CUSTOMER),)
    with pytest.raises(GateConfigurationError, match="duplicate"):
        build_rule_table(rules)


def test_unknown_role_rule_is_rejected():
    rules = access_gate.CUSTOMER_AREA_RULES + (RoutingRule(Role.UNKNOWN, RedirectTarget("/x")),)
    with pytest.raises(GateConfigurationError):
        build_rule_table(rules)


def test_missing_area_table_is_rejected():
    with pytest.raises(GateConfigurationError, match="customer-area"):
        AccessGate({})


def test_shared_gate_gives_identical_results_across_threads(gate):
    sessions = [SessionAbsent(), SessionAbsent("no_account"), *(SessionPresent(role) for role in Role)] * 50
    expected = [gate.evaluate(session) for session in sessions]
    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(gate.evaluate, sessions))
    assert results == expected
