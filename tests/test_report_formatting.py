from adapters.report_formatting import format_batch_lines, format_closed_label, format_result


def test_closed_label() -> None:
    assert format_closed_label(0) == "(nothing to restore)"
    assert format_closed_label(1) == "(1 tab closed)"
    assert format_closed_label(4) == "(4 tabs closed)"


def test_failure_shows_error() -> None:
    result = {"success": False, "action": "execute_custom_rule", "error": "Invalid regex"}

    assert format_result(result) == "Failed: Invalid regex"


def test_dry_run_wording() -> None:
    assert format_result({"success": True, "action": "test_custom_rule", "count": 0}) == (
        "No matching tabs found for this rule."
    )
    assert format_result(
        {"success": True, "action": "test_custom_rule", "count": 2, "matched_ids": [4, 9]}
    ) == "Found 2 matching tabs. Tab IDs: 4, 9"


def test_trigger_and_restore_wording() -> None:
    closed = {
        "success": True,
        "action": "execute_default_rule",
        "count": 2,
        "closed_ids": [1, 2],
        "rule_name": "Ignore URL parameters",
    }

    assert format_result(closed) == "Ignore URL parameters: closed 2 tabs (1, 2)."
    assert format_result({"success": True, "action": "restore_last_closed", "count": 1}) == "Reopened 1 tab."
    assert format_result({"success": True, "action": "restore_last_closed", "count": 0}) == "Nothing to restore."


def test_batch_lines_fall_back_to_url() -> None:
    lines = format_batch_lines(
        [
            {"id": 1, "url": "https://a.example/", "title": "A"},
            {"id": 2, "url": "https://b.example/", "title": ""},
        ]
    )

    assert lines == ["1: A <https://a.example/>", "2: https://b.example/ <https://b.example/>"]
