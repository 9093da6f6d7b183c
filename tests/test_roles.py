import pytest

from gatekeeper.roles import Role, SessionAbsent, SessionPresent


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, Role.CUSTOMER),
        (2, Role.STAFF),
        (3, Role.MANAGER),
        (4, Role.ADMIN),
        ("3", Role.MANAGER),
        (" 4 ", Role.ADMIN),
        ("Customer", Role.CUSTOMER),
        ("staff", Role.STAFF),
    ],
)
def test_from_code_known_roles(code, expected):
    assert Role.from_code(code) is expected


@pytest.mark.parametrize("code", [0, 5, 99, -1, None, True, False, "", "owner", 3.0, [], {}])
def test_from_code_unrecognized_values_are_unknown(code):
    assert Role.from_code(code) is Role.UNKNOWN


def test_from_code_passes_role_through():
    assert Role.from_code(Role.ADMIN) is Role.ADMIN


def test_session_states_compare_by_value():
    assert SessionPresent(Role.STAFF) == SessionPresent(Role.STAFF)
    assert SessionAbsent() == SessionAbsent("no_session")
    assert SessionAbsent("no_account") != SessionAbsent("no_session")
