# tests/test_args.py

from __future__ import annotations

from tasktrack.cli.args import parse_args


def test_positionals_and_option_forms() -> None:
    parsed = parse_args(["add", "Buy milk", "--detail", "2 litres", "--due=2025-01-10", "--urgent"])
    assert parsed.positionals == ["add", "Buy milk"]
    assert parsed.options == {"detail": "2 litres", "due": "2025-01-10", "urgent": True}


def test_option_followed_by_dash_token_is_a_flag() -> None:
    parsed = parse_args(["up", "3", "--verbose", "--status", "done"])
    assert parsed.options == {"verbose": True, "status": "done"}
    assert parsed.positionals == ["up", "3"]


def test_equals_keeps_everything_after_first_equals() -> None:
    parsed = parse_args(["--detail=a=b"])
    assert parsed.options["detail"] == "a=b"
    assert parsed.option_str("detail") == "a=b"
    assert parsed.option_str("missing") is None


def test_trailing_option_is_flag_and_option_str_ignores_flags() -> None:
    parsed = parse_args(["ls", "--all"])
    assert parsed.options == {"all": True}
    assert parsed.option_str("all") is None
