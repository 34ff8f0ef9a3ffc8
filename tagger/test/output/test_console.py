"""Tests for tagger.output.console module."""

from __future__ import annotations

import pytest

from tagger.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.TAG) == "tag"


class TestMockConsole:
    def test_print(self) -> None:
        console = MockConsole()
        console.print("hello", Style.DIM)
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DIM

    def test_prefixed_messages(self) -> None:
        console = MockConsole()
        console.success("created tag v1.0.0")
        console.error("HEAD is not a branch")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == [
            "OK created tag v1.0.0",
            "error: HEAD is not a branch",
            "warning: careful",
            "info: fyi",
        ]
        assert console.has_error() is True

    def test_tag(self) -> None:
        console = MockConsole()
        console.tag("v1.2.0", "latest release")
        console.tag("v1.3.0-pre0")
        assert console.messages == ["v1.2.0 latest release", "v1.3.0-pre0"]
        assert console.count(Style.TAG) == 2

    def test_find_and_text(self) -> None:
        console = MockConsole()
        console.header("Latest tags")
        console.newline()
        console.print("done")
        assert console.text == "Latest tags\n\ndone"
        assert [o.style for o in console.find("Latest")] == [Style.HEADER]


class TestRichConsole:
    def test_satisfies_protocol(self, capsys: pytest.CaptureFixture[str]) -> None:
        def use_console(c: ConsoleProtocol) -> None:
            c.header("Latest tags")
            c.tag("v1.0.0", "latest release")
            c.tag("[weird]")
            c.print("plain [not markup]", Style.DIM)
            c.success("ok")
            c.error("bad")
            c.warning("warn")
            c.info("info")
            c.newline()

        use_console(RichConsole())
        use_console(MockConsole())

        out = capsys.readouterr().out
        assert "v1.0.0" in out
        assert "[weird]" in out
        assert "plain [not markup]" in out
