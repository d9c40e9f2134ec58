"""Token helpers shared by the YAML and environment config loaders.

Config values arrive either as YAML scalars or as raw `EXECABLE_*` strings;
both are funnelled through the same switch table and list splitter so the
two sources accept identical spellings.
"""

from __future__ import annotations

_SWITCH_TOKENS: dict[str, bool] = {
    "1": True,
    "on": True,
    "true": True,
    "yes": True,
    "0": False,
    "off": False,
    "false": False,
    "no": False,
}


def clean_token(value: object) -> str | None:
    """Return `value` as trimmed text, or `None` when nothing is left."""

    text = "" if value is None else str(value).strip()
    return text or None


def parse_switch(value: object) -> bool | None:
    """Map an on/off token (or a real `bool`) to a `bool`.

    Unknown and blank tokens give `None` so callers can pick their own error.
    """

    if isinstance(value, bool):
        return value
    token = clean_token(value)
    if token is None:
        return None
    return _SWITCH_TOKENS.get(token.lower())


def require_switch(value: object, label: str) -> bool:
    """Parse a switch that must be set, naming `label` in the error."""

    parsed = parse_switch(value)
    if parsed is None:
        accepted = "/".join(sorted(_SWITCH_TOKENS))
        raise ValueError(f"{label} must be an on/off switch ({accepted}), got {value!r}.")
    return parsed


def split_list_value(value: str, separator: str) -> tuple[str, ...]:
    """Split a delimited list, dropping blank entries and surrounding whitespace.

    Example: `split_list_value("ls, cat,,", ",")` returns `("ls", "cat")`.
    """

    cleaned = (clean_token(item) for item in value.split(separator))
    return tuple(item for item in cleaned if item is not None)
