import pytest

from src.domain.services.auth.password_policy import PasswordPolicyValidator


@pytest.fixture
def policy():
    return PasswordPolicyValidator()


def test_valid_password_has_no_violations(policy):
    assert policy.violations("P@ssw0rd!") == []


@pytest.mark.parametrize(
    "password, expected",
    [
        ("P@ss0r", "Password must be at least 8 characters long."),
        ("p@ssw0rd!", "Password must contain at least one uppercase letter."),
        ("P@SSW0RD!", "Password must contain at least one lowercase letter."),
        ("P@ssword!", "Password must contain at least one digit."),
        ("Passw0rdX", "Password must contain at least one special character."),
    ],
)
def test_single_rule_violation(policy, password, expected):
    assert policy.violations(password) == [expected]


def test_every_violation_is_reported_in_rule_order(policy):
    # Act
    reasons = policy.violations("abc")

    # Assert
    assert reasons == [
        "Password must be at least 8 characters long.",
        "Password must contain at least one uppercase letter.",
        "Password must contain at least one digit.",
        "Password must contain at least one special character.",
    ]


def test_none_is_treated_as_empty(policy):
    assert len(policy.violations(None)) == 5


def test_rules_can_be_relaxed():
    policy = PasswordPolicyValidator(
        min_length=4,
        require_uppercase=False,
        require_digit=False,
        require_special_char=False,
    )

    assert policy.violations("abcd") == []
