from __future__ import annotations

from lib_log_console.adapters.console.rich_console import RichLineWriter
from lib_log_console.adapters.format_providers import TimezoneFormatProvider
from lib_log_console.adapters.json_formatter import JsonLinesFormatter
from lib_log_console.adapters.template_formatter import compile_template
from lib_log_console.application.ports import FormatProvider, LineWriterPort, TemplateCompiler, TextFormatterPort


class _Writer:
    def write_line(self, text: str) -> None:
        pass


class _Formatter:
    def format(self, event) -> str:
        return ""


def test_structural_fakes_satisfy_ports() -> None:
    assert isinstance(_Writer(), LineWriterPort)
    assert isinstance(_Formatter(), TextFormatterPort)


def test_adapters_satisfy_ports(record_console) -> None:
    assert isinstance(RichLineWriter(console=record_console), LineWriterPort)
    assert isinstance(compile_template("{Message}"), TextFormatterPort)
    assert isinstance(JsonLinesFormatter(), TextFormatterPort)
    assert isinstance(TimezoneFormatProvider(), FormatProvider)
    assert isinstance(compile_template, TemplateCompiler)


def test_objects_without_the_method_do_not_satisfy_ports() -> None:
    assert not isinstance(object(), LineWriterPort)
    assert not isinstance(object(), TextFormatterPort)
    assert not isinstance(object(), FormatProvider)
