import pytest

from passcheck.policy import (
    DEFAULT_FAIL_MSG,
    DEFAULT_REPORT,
    DEFAULT_SUCCESS_MSG,
    DEFAULT_SUGGESTION,
    Policy,
    PolicyEngine,
    Rule,
    RuleKind,
)


def run(policy, password):
    return PolicyEngine(policy).run(password)


@pytest.mark.parametrize(
    "rule,kind",
    [
        (Rule(fn=lambda pw, opts: True, type="regex", pattern="x"), RuleKind.PREDICATE),
        (Rule(type="regex", pattern="x"), RuleKind.REGEX),
        (Rule(type="length", min=10), RuleKind.LENGTH),
        (Rule(type="custom", check=lambda pw, opts: True), RuleKind.CUSTOM),
        (Rule(type="regex"), None),
        (Rule(type="regex", pattern=5), None),
        (Rule(type="length", min=0), None),
        (Rule(type="custom", check="not callable"), None),
        (Rule(type="unknown"), None),
    ],
)
def test_rule_kind_priority(rule, kind):
    assert rule.kind is kind


def test_required_length_rule_and_min_score():
    policy = Policy(
        rules=[Rule(name="len10", type="length", min=10, required=True, points=50,
                    suggestion="Use at least 10 characters.")],
        min_score=50,
    )
    result = run(policy, "abcde")

    assert result.score == 0
    assert result.suggestions == [
        "Use at least 10 characters.",
        "Password must score at least 50 points.",
    ]
    assert result.report == [DEFAULT_REPORT, "Policy: minimum score not met."]


def test_regex_rule_passes_when_pattern_absent():
    policy = Policy(rules=[Rule(name="no-password", type="regex", pattern="(?i)password", points=30)])

    passed = run(policy, "G7!kzQ2@wLp9")
    assert passed.score == 30
    assert passed.details[0].passed is True
    assert passed.details[0].message == DEFAULT_SUCCESS_MSG

    failed = run(policy, "myPassword1")
    assert failed.score == 0
    assert failed.details[0].message == DEFAULT_FAIL_MSG


def test_predicate_receives_options():
    seen = []

    def predicate(password, options):
        seen.append(options)
        return len(set(password)) > 5

    result = PolicyEngine(Policy(rules=[Rule(name="unique", fn=predicate, points=10)])).run(
        "abcdefg", options="opts"
    )
    assert result.score == 10
    assert seen == ["opts"]


def test_points_are_additive_and_independent():
    policy = Policy(
        rules=[
            Rule(name="a", type="length", min=4, points=10),
            Rule(name="b", type="length", min=100, points=40),
            Rule(name="c", type="custom", check=lambda pw, opts: True, points=25),
        ]
    )
    result = run(policy, "abcdef")
    assert result.score == 35
    assert [d.rule for d in result.details] == ["a", "b", "c"]


@pytest.mark.parametrize(
    "rule",
    [
        {"name": "bad", "type": "unknown", "points": 10, "required": True},
        {"name": "bad", "type": "regex", "pattern": "(", "points": 10, "required": True},
        {"name": "bad", "type": "length", "min": "ten", "points": 10, "required": True},
        {"name": "bad", "type": "regex", "pattern": 5, "points": 10, "required": True},
    ],
)
def test_malformed_rules_fail_silently(rule):
    result = run(Policy(rules=[rule]), "whatever")
    assert result.score == 0
    assert result.details[0].passed is False
    assert result.suggestions == [DEFAULT_SUGGESTION]


def test_unknown_rule_shape_fails():
    result = run(Policy(rules=[42]), "whatever")
    assert result.details[0].passed is False
    assert result.details[0].rule == "custom"


def test_optional_rule_failure_adds_no_suggestion():
    result = run(Policy(rules=[Rule(type="length", min=20, points=5)]), "short")
    assert result.suggestions == []
    assert result.report == []


def test_min_score_met():
    policy = Policy(rules=[Rule(type="length", min=4, points=60)], min_score=50)
    assert run(policy, "abcdef").suggestions == []


def test_from_dict_camel_case():
    policy = Policy.from_dict(
        {
            "rules": [
                {"name": "len", "type": "length", "min": 12, "points": 20,
                 "successMsg": "Long", "failMsg": "Short"},
            ],
            "minScore": 30,
        }
    )
    assert policy.min_score == 30
    assert policy.rules[0].success_msg == "Long"

    result = run(policy, "abc")
    assert result.details[0].message == "Short"


@pytest.mark.parametrize("min_score,expected", [("50", 50), ("abc", None), (None, None), (0, None)])
def test_min_score_is_coerced(min_score, expected):
    policy = Policy.from_dict({"rules": [], "minScore": min_score})
    assert policy.min_score == expected

    suggestions = run(policy, "abc").suggestions
    if expected:
        assert suggestions == [f"Password must score at least {expected} points."]
    else:
        assert suggestions == []


@pytest.mark.parametrize("data", [{"minScore": 5}, {"rules": "strict"}, {"rules": 3}])
def test_policy_without_rule_list(data):
    policy = Policy.from_dict(data)
    assert policy.rules is None
    assert run(policy, "abc").details == []


def test_rule_tuple_becomes_list():
    policy = Policy(rules=({"type": "length", "min": 2, "points": 5},))
    assert isinstance(policy.rules, list)
    assert run(policy, "abc").score == 5
