from frontend.validators import is_runnable, parse_rule_input


def test_blank_fields_are_rejected() -> None:
    assert parse_rule_input("  ", r"github\.com").error == "Please fill in all fields"
    assert parse_rule_input("GitHub", "").error == "Please fill in all fields"


def test_invalid_regex_is_rejected() -> None:
    parsed = parse_rule_input("Broken", "[invalid(regex")

    assert parsed.pattern is None
    assert parsed.error is not None
    assert parsed.error.startswith("Invalid regex pattern:")


def test_valid_input_is_trimmed() -> None:
    parsed = parse_rule_input(" GitHub ", r" github\.com ")

    assert parsed.error is None
    assert (parsed.name, parsed.pattern) == ("GitHub", r"github\.com")


def test_disabled_rules_are_not_runnable() -> None:
    assert is_runnable({"name": "GitHub", "pattern": "github"})
    assert is_runnable({"name": "GitHub", "pattern": "github", "enabled": True})
    assert not is_runnable({"name": "GitHub", "pattern": "github", "enabled": False})
