import json

JsonType = (
    int
    | str
    | float
    | bool
    | dict[str, "JsonType"]
    | list["JsonType"]
    | tuple["JsonType", ...]
    | None
)
"""Data the JSON writer accepts as is."""

JSON_ARRAY_TYPES = (list, tuple)
"""The exact types written as JSON arrays."""


def make_json_encoder(*, allow_nan: bool, indent: int | None = None) -> json.JSONEncoder:
    """Create the JSON writer used for serialization."""
    separators = (",", ":") if indent is None else (",", ": ")
    return json.JSONEncoder(separators=separators, allow_nan=allow_nan, indent=indent)
