"""Unit tests for config token helpers."""

import pytest

from execable.parsing import clean_token, parse_switch, require_switch, split_list_value


def test_clean_token_trims_and_blanks_to_none() -> None:
    """Blank or missing values carry no token."""

    assert clean_token(None) is None
    assert clean_token(" \t ") is None
    assert clean_token(" /proc/self/exe ") == "/proc/self/exe"
    assert clean_token(16) == "16"


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("On", True),
        (" yes ", True),
        ("1", True),
        (True, True),
        ("OFF", False),
        ("no", False),
        (0, False),
        (False, False),
    ],
)
def test_parse_switch_accepts_yaml_and_env_spellings(token: object, expected: bool) -> None:
    """YAML scalars and environment strings share one table."""

    assert parse_switch(token) is expected


@pytest.mark.parametrize("value", [None, "", "sometimes", "2", "enabled"])
def test_parse_switch_leaves_unknown_tokens_undecided(value: object) -> None:
    """Unrecognized switches are reported as `None`, not guessed."""

    assert parse_switch(value) is None


def test_require_switch_names_the_setting_and_accepted_tokens() -> None:
    """The error says which setting was wrong and what would have worked."""

    with pytest.raises(ValueError) as exc_info:
        require_switch("sometimes", "`EXECABLE_PREFER_APPLETS`")

    message = str(exc_info.value)
    assert message.startswith("`EXECABLE_PREFER_APPLETS` must be an on/off switch")
    assert "0/1/false/no/off/on/true/yes" in message
    assert "'sometimes'" in message


def test_split_list_value_drops_blank_entries() -> None:
    """Applet lists and self-image paths ignore empty items."""

    assert split_list_value(" ls, cat,,echo ,", ",") == ("ls", "cat", "echo")
    assert split_list_value("/proc/self/exe::/bin/box", ":") == ("/proc/self/exe", "/bin/box")
    assert split_list_value("", ",") == ()
