import logging
import sys
from pathlib import Path

import pytest

from mal import config
from mal.errors import MalInvariantError
from mal.interpreter import Interpreter
from mal.repl import REPL, main
from mal.types.function import Builtin
from mal.types.symbol import Symbol


@pytest.fixture
def repl(interp):
    return REPL(interp, "user> ", None)


def test_rep_prints_literal(repl):
    assert repl.rep("(+ 1 2)") == "3"
    assert repl.rep('"hi"') == '"hi"'


def test_blank_line_prints_nothing(repl):
    assert repl.rep("") is None
    assert repl.rep("   ") is None


def test_comment_only_line_prints_nothing(repl):
    assert repl.rep("; just a comment") is None
    assert repl.rep("  ,, ; trailing") is None
    assert repl.rep("1 ; one") == "1"


@pytest.mark.parametrize(
    "line,message",
    [
        ("(+ 1", "error: Expected ')', got end of input"),
        ("zzz", "error: 'zzz' not found"),
        ("(1 2)", "error: Cannot apply non-function 1"),
        ("(let* (a) a)", "error: let* bindings must pair every name with a value, got 1 forms"),
        ("(/ 1 0)", "error: Division by zero"),
    ]
)
def test_recoverable_errors_are_reported(repl, line, message):
    assert repl.rep(line) == message
    # the session keeps working afterwards
    assert repl.rep("(* 2 3)") == "6"


@pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"), reason="no int string-conversion limit"
)
def test_unprintable_result_is_reported(repl):
    product = "(* " + "99999999999999999999 " * 300 + ")"
    assert repl.rep(product).startswith("error: Integer too large to print")
    assert repl.rep("(def! big " + product + ")").startswith("error: ")
    # the value was still bound; only printing it failed
    assert repl.rep("(- big big)") == "0"


def test_invariant_error_is_fatal(interp):
    interp.env = interp.env.define(Symbol("void"), Builtin("void", lambda args: None))
    repl = REPL(interp, "> ", None)
    with pytest.raises(MalInvariantError):
        repl.rep("(void)")


def test_unexpected_exception_is_logged(interp, caplog):
    def boom(args):
        raise RuntimeError("kaput")

    interp.env = interp.env.define(Symbol("boom"), Builtin("boom", boom))
    repl = REPL(interp, "> ", None)
    with caplog.at_level(logging.ERROR):
        assert repl.rep("(boom)") == "error: kaput"
    assert "Unexpected failure" in caplog.text


def test_loop_reads_until_eof(repl, monkeypatch, capsys):
    lines = iter(["(def! x 4)", "", "(* x x)", "oops"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    repl.loop()
    out = capsys.readouterr().out
    assert out == "4\n16\nerror: 'oops' not found\n\n"


def test_complete_lists_bound_names(repl):
    repl.interp.eval("(def! my-var 1)")
    assert repl.complete("my-", 0) == "my-var"
    assert repl.complete("my-", 1) is None


def test_main_eval_option(capsys):
    assert main(["-e", "(+ 1 2)"]) == 0
    assert capsys.readouterr().out == "3\n"


def test_main_eval_option_error(capsys):
    assert main(["-e", "(+ 1"]) == 1
    assert capsys.readouterr().out.startswith("error: ")


def test_config_defaults(monkeypatch):
    monkeypatch.delenv("MAL_HISTORY_FILE", raising=False)
    assert config.get_prompt() == "user> "
    assert config.get_history_file() == Path.home() / ".mal_history"
    assert config.get_log_level() == logging.WARNING


def test_config_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("MAL_PROMPT", "mal> ")
    monkeypatch.setenv("MAL_HISTORY_FILE", str(tmp_path / "h"))
    monkeypatch.setenv("MAL_LOG_LEVEL", "debug")
    assert config.get_prompt() == "mal> "
    assert config.get_history_file() == tmp_path / "h"
    assert config.get_log_level() == logging.DEBUG


def test_config_disable_history_and_bad_level(monkeypatch):
    monkeypatch.setenv("MAL_HISTORY_FILE", "")
    monkeypatch.setenv("MAL_LOG_LEVEL", "chatty")
    assert config.get_history_file() is None
    assert config.get_log_level() == logging.WARNING
