"""Tests for logcodec/exception_parser.py"""

from logcodec.events import ExceptionEvent, Frame
from logcodec.exception_parser import (
    COULD_NOT_PARSE_MESSAGE,
    ParseFailure,
    parse_exception,
)


# ── successful parses ───────────────────────────────────────────────

class TestParseSuccess:
    def test_single_frame(self):
        text = "** (RuntimeError) boom\n    (myapp) lib/foo.ex:10: MyApp.Foo.bar/1\n"
        result = parse_exception(text)

        assert isinstance(result, ExceptionEvent)
        assert result.name == "RuntimeError"
        assert result.message == "boom"
        assert len(result.backtrace) == 1
        frame = result.backtrace[0]
        assert frame.file == "lib/foo.ex"
        assert frame.line == 10
        assert frame.function == "MyApp.Foo.bar/1"

    def test_app_name_kept_on_frame(self):
        result = parse_exception("** (RuntimeError) boom\n    (myapp) lib/foo.ex:10: MyApp.Foo.bar/1")
        assert result.backtrace[0].app_name == "myapp"

    def test_backtrace_is_reversed_into_call_order(self):
        text = (
            "** (ArithmeticError) bad argument in arithmetic expression\n"
            "    (myapp) lib/inner.ex:3: MyApp.Inner.divide/2\n"
            "    (myapp) lib/outer.ex:7: MyApp.Outer.call/0\n"
        )
        result = parse_exception(text)

        assert [f.function for f in result.backtrace] == [
            "MyApp.Outer.call/0",
            "MyApp.Inner.divide/2",
        ]

    def test_full_report(self, crash_report):
        result = parse_exception(crash_report)
        assert result.name == "RuntimeError"
        assert result.backtrace == (
            Frame(function=":proc_lib.init_p_do_apply/3", file="proc_lib.erl", line=247, app_name="stdlib"),
            Frame(function="Task.Supervised.do_apply/2", file="lib/task/supervised.ex", line=85, app_name="elixir"),
            Frame(function="MyApp.Worker.run/1", file="lib/my_app/worker.ex", line=42, app_name="myapp"),
        )

    def test_non_numeric_line_number_becomes_none(self):
        text = "** (RuntimeError) boom\n    (myapp) lib/foo.ex:nope: MyApp.Foo.bar/1\n"
        result = parse_exception(text)
        assert isinstance(result, ExceptionEvent)
        assert result.backtrace[0].line is None
        assert result.backtrace[0].function == "MyApp.Foo.bar/1"

    def test_leading_noise_is_ignored(self):
        text = (
            "\n"
            "Erlang/OTP 26 [erts-14.0]\n"
            "(this line looks like a frame but comes before the header)\n"
            "** (KeyError) key :id not found\n"
            "    (myapp) lib/foo.ex:1: MyApp.Foo.get/1\n"
        )
        result = parse_exception(text)
        assert result.name == "KeyError"
        assert result.message == "key :id not found"
        assert len(result.backtrace) == 1

    def test_exit_line_before_header_is_skipped(self):
        text = (
            "** (exit) an exception was raised:\n"
            "    ** (RuntimeError) boom\n"
            "        (myapp) lib/foo.ex:10: MyApp.Foo.bar/1\n"
        )
        result = parse_exception(text)
        assert result.name == "RuntimeError"
        assert result.message == "boom"

    def test_message_is_trimmed(self):
        result = parse_exception("** (RuntimeError)    spaced out   \n  (a) b.ex:1: f/0")
        assert result.message == "spaced out"

    def test_message_may_contain_parentheses(self):
        result = parse_exception("** (ArgumentError) bad value (got: nil)\n  (a) b.ex:1: f/0")
        assert result.name == "ArgumentError"
        assert result.message == "bad value (got: nil)"

    def test_empty_message_allowed(self):
        result = parse_exception("** (RuntimeError)\n  (a) b.ex:1: f/0")
        assert isinstance(result, ExceptionEvent)
        assert result.message == ""

    def test_noise_between_frames_is_ignored(self):
        text = (
            "** (RuntimeError) boom\n"
            "    (myapp) lib/a.ex:1: A.a/0\n"
            "\n"
            "    wrapped continuation text\n"
            "    (myapp) malformed frame without separators\n"
            "    (myapp) lib/b.ex:2: B.b/0\n"
        )
        result = parse_exception(text)
        assert [f.file for f in result.backtrace] == ["lib/b.ex", "lib/a.ex"]

    def test_header_without_closing_paren_is_skipped(self):
        text = "** (broken header\n** (RuntimeError) boom\n  (a) b.ex:1: f/0"
        result = parse_exception(text)
        assert result.name == "RuntimeError"

    def test_crlf_line_endings(self):
        text = "** (RuntimeError) boom\r\n    (myapp) lib/foo.ex:10: MyApp.Foo.bar/1\r\n"
        result = parse_exception(text)
        assert result.message == "boom"
        assert result.backtrace[0].function == "MyApp.Foo.bar/1"


# ── failures ────────────────────────────────────────────────────────

class TestParseFailure:
    def test_exit_only_fails(self):
        result = parse_exception("** (exit) something\n")
        assert isinstance(result, ParseFailure)
        assert result.reason == COULD_NOT_PARSE_MESSAGE

    def test_empty_input_fails(self):
        result = parse_exception("")
        assert result == ParseFailure(reason="could_not_parse_message")

    def test_header_without_frames_fails(self):
        assert isinstance(parse_exception("** (RuntimeError) boom\n"), ParseFailure)

    def test_frames_without_header_fail(self):
        text = "    (myapp) lib/foo.ex:10: MyApp.Foo.bar/1\n"
        assert isinstance(parse_exception(text), ParseFailure)

    def test_plain_log_text_fails(self):
        assert isinstance(parse_exception("User logged in"), ParseFailure)

    def test_failure_is_falsy(self):
        assert not parse_exception("")
