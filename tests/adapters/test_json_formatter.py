from __future__ import annotations

import json

from lib_log_console.adapters.json_formatter import JsonLinesFormatter
from lib_log_console.domain.levels import LogLevel


def test_json_formatter_renders_core_fields(make_event) -> None:
    event = make_event("Hello, {Name}!", level=LogLevel.WARNING, properties={"Name": "Godot"})
    payload = json.loads(JsonLinesFormatter().format(event))
    assert payload == {
        "@t": "2025-09-23T12:34:56.789000+00:00",
        "@l": "Warning",
        "@m": "Hello, Godot!",
        "@mt": "Hello, {Name}!",
        "Name": "Godot",
    }


def test_json_formatter_keeps_exception_on_one_line(make_event) -> None:
    event = make_event("failed", exception="line 1\nline 2")
    rendered = JsonLinesFormatter().format(event)
    assert "\n" not in rendered
    assert json.loads(rendered)["@x"] == "line 1\nline 2"


def test_json_formatter_can_omit_message_template(make_event) -> None:
    payload = json.loads(JsonLinesFormatter(include_message_template=False).format(make_event("plain")))
    assert "@mt" not in payload
    assert payload["@m"] == "plain"


def test_json_formatter_reserved_keys_win_over_properties(make_event) -> None:
    payload = json.loads(JsonLinesFormatter().format(make_event("m", properties={"@m": "spoof", "Other": [1]})))
    assert payload["@m"] == "m"
    assert payload["Other"] == [1]
