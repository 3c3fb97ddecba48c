import io

import pytest

from helpful import EXIT_FAILURE, EXIT_SUCCESS, Error, MainResult, Result, main, span
from helpful.core.error import CALL_HISTORY_HEADER


class Reported:
    def report(self):
        return 7


def test_success_defers_to_value():
    assert MainResult.ok().report() == EXIT_SUCCESS
    assert MainResult.ok(3).report() == 3
    assert MainResult.ok(False).report() == EXIT_FAILURE
    assert MainResult.ok(Reported()).report() == 7


def test_failure_writes_full_render():
    with span("job", id=1):
        err = Error(RuntimeError("boom"))
    buf = io.StringIO()

    code = MainResult.err(err).report(stream=buf)

    assert code == EXIT_FAILURE
    assert buf.getvalue() == err.render() + "\n"


def test_failure_goes_to_stderr_by_default(capsys):
    code = MainResult.from_call(lambda: 1 / 0).report()
    captured = capsys.readouterr()

    assert code == EXIT_FAILURE
    assert captured.out == ""
    assert captured.err.startswith("division by zero")
    assert CALL_HISTORY_HEADER in captured.err
    assert captured.err.endswith("\n")


def test_err_wraps_native_and_keeps_error():
    native = MainResult.err(ValueError("v"))
    assert isinstance(native.error, Error)

    err = Error(ValueError("v"))
    assert MainResult.err(err).error is err


def test_from_result():
    assert MainResult.from_result(Result.success(0)).is_ok
    failed = MainResult.from_result(Result.failure(OSError("gone")))
    assert not failed.is_ok
    assert str(failed.error) == "gone"


def test_main_decorator_exits_with_code(capsys):
    @main
    def good():
        return None

    @main
    def bad():
        raise OSError("no disk")

    with pytest.raises(SystemExit) as ok_exit:
        good()
    assert ok_exit.value.code == EXIT_SUCCESS

    with pytest.raises(SystemExit) as bad_exit:
        bad()
    assert bad_exit.value.code == EXIT_FAILURE
    assert "no disk" in capsys.readouterr().err


def test_stderr_output_is_the_render_verbatim(capsys):
    err = Error(ValueError("col1\tcol2 \x1b[31mred"))

    code = MainResult.err(err).report()

    assert code == EXIT_FAILURE
    assert capsys.readouterr().err == err.render() + "\n"
