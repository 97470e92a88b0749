import subprocess
from unittest.mock import patch

from clipboard import copy_to_clipboard, format_row, quote_field


def test_quote_field():
    assert quote_field("plain") == "plain"
    assert quote_field("a b") == '"a b"'
    assert quote_field("a,b") == '"a,b"'
    assert quote_field("a\tb") == '"a\tb"'
    assert quote_field('say "hi"') == '"say ""hi"""'
    assert quote_field('x"y') == 'x""y'


def test_format_row_joins_with_commas():
    assert format_row(["1", "two words", "x"]) == '1,"two words",x'


def test_configured_command_is_used():
    with patch("subprocess.run") as run:
        assert copy_to_clipboard("value", ["fake-clip"]) is True
        assert run.call_count == 1
        call = run.call_args_list[0]
        assert call.args[0] == ["fake-clip"]
        assert call.kwargs.get("input") == "value"
        assert call.kwargs.get("text") is True


def test_falls_back_when_command_is_missing():
    def fake_run(argv, **kwargs):
        if argv[0] == "wl-copy":
            raise FileNotFoundError(argv[0])
        return subprocess.CompletedProcess(argv, 0)

    with patch("subprocess.run", side_effect=fake_run) as run:
        assert copy_to_clipboard("value") is True
        assert run.call_args_list[-1].args[0] == ["xclip", "-selection", "clipboard"]


def test_failure_is_reported_not_raised():
    error = subprocess.CalledProcessError(1, ["fake-clip"])
    with patch("subprocess.run", side_effect=error):
        assert copy_to_clipboard("value", ["fake-clip"]) is False

    with patch("subprocess.run", side_effect=FileNotFoundError("x")):
        assert copy_to_clipboard("value") is False
