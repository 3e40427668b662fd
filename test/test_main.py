"""
Command line tests for dde
"""

import io

import pytest
from dde.main import run


@pytest.fixture
def script(tmp_path):
  """Write a script file and return its path"""
  def _script(source):
    path = tmp_path / "script.dde"
    path.write_text(source, encoding="utf-8")
    return str(path)
  return _script


@pytest.fixture
def stdin(monkeypatch):
  def _stdin(text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
  return _stdin


class TestRunMode:

  def test_prints_final_value(self, script, capsys):
    assert run(["dde", "run", script("x = 2; x * 21")]) == 0
    assert capsys.readouterr().out == "42\n"

  def test_null_result_prints_nothing(self, script, capsys):
    assert run(["dde", "run", script("print('hi')")]) == 0
    assert capsys.readouterr().out == "hi\n"

  def test_reads_stdin(self, stdin, capsys):
    stdin("'a' + 'b'")
    assert run(["dde", "run"]) == 0
    assert capsys.readouterr().out == "ab\n"

  def test_runtime_error(self, script, capsys):
    assert run(["dde", "run", script("nope")]) == 1
    assert "Error: undefined variable: nope" in capsys.readouterr().err

  def test_lex_error(self, script, capsys):
    assert run(["dde", "run", script("'open")]) == 1
    assert "unterminated string literal" in capsys.readouterr().err

  def test_missing_file(self, tmp_path, capsys):
    missing = str(tmp_path / "missing.dde")
    assert run(["dde", "run", missing]) == 1
    assert f"Error: file '{missing}' not found" in capsys.readouterr().err

  def test_directory_argument(self, tmp_path, capsys):
    assert run(["dde", "run", str(tmp_path)]) == 1
    assert f"Error: cannot read '{tmp_path}'" in capsys.readouterr().err

  def test_invalid_utf8(self, tmp_path, capsys):
    path = tmp_path / "bad.dde"
    path.write_bytes(b"x = \xff\xfe")
    assert run(["dde", "run", str(path)]) == 1
    assert "is not valid UTF-8" in capsys.readouterr().err

  def test_exit_builtin(self, script):
    with pytest.raises(SystemExit) as exc:
      run(["dde", "run", script("exit()")])
    assert exc.value.code == 0

  def test_debug_logging(self, script, caplog):
    caplog.set_level("DEBUG", logger="dde")
    assert run(["dde", "run", script("x = 1"), "--debug"]) == 0
    assert "lexed 3 tokens" in caplog.text
    assert "parsed 1 statements" in caplog.text


class TestOtherModes:

  def test_lex(self, script, capsys):
    assert run(["dde", "lex", script("x = 1")]) == 0
    out = capsys.readouterr().out
    assert "identifier" in out
    assert "operator" in out

  def test_parse(self, script, capsys):
    assert run(["dde", "parse", script("1 + 2")]) == 0
    assert "Binary(operator='+'" in capsys.readouterr().out

  def test_parse_error(self, script, capsys):
    assert run(["dde", "parse", script("(1")]) == 1
    assert "expected ), got nothing" in capsys.readouterr().err

  def test_unknown_mode(self, capsys):
    assert run(["dde", "fly"]) == 1
    assert "Usage:" in capsys.readouterr().out

  def test_no_mode(self, capsys):
    assert run(["dde"]) == 1
    assert "Usage:" in capsys.readouterr().out


class TestRepl:

  def test_shares_environment(self, stdin, capsys):
    stdin("x = 4\nx * 2\n")
    assert run(["dde", "repl"]) == 0
    out = capsys.readouterr().out
    assert "4\n" in out
    assert "8\n" in out

  def test_errors_do_not_stop_the_loop(self, stdin, capsys):
    stdin("nope\n1 + 1\n")
    assert run(["dde", "repl"]) == 0
    captured = capsys.readouterr()
    assert "undefined variable: nope" in captured.err
    assert "2\n" in captured.out
