from __future__ import annotations

from io import StringIO

from rich.console import Console

from lib_log_console.adapters.console.rich_console import RichLineWriter


def test_rich_line_writer_prints_one_line_per_call(record_console) -> None:
    writer = RichLineWriter(console=record_console)
    writer.write_line("first")
    writer.write_line("second")
    assert record_console.export_text() == "first\nsecond\n"


def test_rich_line_writer_interprets_markup(record_console) -> None:
    writer = RichLineWriter(console=record_console)
    writer.write_line("[bold red]alert[/bold red] done")
    assert record_console.export_text() == "alert done\n"


def test_rich_line_writer_keeps_uppercase_brackets_verbatim(record_console) -> None:
    writer = RichLineWriter(console=record_console)
    writer.write_line("12:00:00 [INF] ready")
    assert record_console.export_text() == "12:00:00 [INF] ready\n"


def test_rich_line_writer_can_disable_markup(record_console) -> None:
    writer = RichLineWriter(console=record_console, markup=False)
    writer.write_line("[bold]raw[/bold]")
    assert record_console.export_text() == "[bold]raw[/bold]\n"


def test_rich_line_writer_does_not_wrap_long_lines() -> None:
    console = Console(file=StringIO(), record=True, width=20, color_system=None)
    writer = RichLineWriter(console=console)
    line = "x" * 50 + " " + "y" * 10
    writer.write_line(line)
    assert console.export_text() == line + "\n"


def test_rich_line_writer_prints_empty_line(record_console) -> None:
    writer = RichLineWriter(console=record_console)
    writer.write_line("")
    assert record_console.export_text() == "\n"


def test_rich_line_writer_colour_flags_configure_default_console() -> None:
    forced = RichLineWriter(force_color=True)
    assert forced.console.is_terminal
    plain = RichLineWriter(no_color=True)
    assert plain.console.no_color


def test_rich_line_writer_prints_invalid_markup_verbatim(record_console) -> None:
    writer = RichLineWriter(console=record_console)
    writer.write_line("reading [/etc/app.conf]")
    writer.write_line("next")
    assert record_console.export_text() == "reading [/etc/app.conf]\nnext\n"
