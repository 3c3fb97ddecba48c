import copy
import pickle
import threading
from types import SimpleNamespace

import pytest

from helpful import Error, MessageError, BacktraceStatus, get_settings, span
from helpful.core.error import BACKTRACE_HEADER, CALL_HISTORY_HEADER
import helpful.trace.backtrace as bt


def test_short_form_is_source_message():
    exc = ValueError("bad value")
    err = Error(exc)
    assert str(err) == "bad value"
    assert CALL_HISTORY_HEADER not in str(err)
    assert err.source is exc
    assert err.__cause__ is exc


def test_render_without_spans_has_empty_history():
    err = Error.new(RuntimeError("boom"))
    assert err.render() == "boom\n\nCall history (recent first):\n"


def test_render_falls_back_to_repr_for_empty_message():
    err = Error(RuntimeError())
    assert err.render().startswith("RuntimeError()\n\n")


def test_wrap_is_identity_on_error():
    with span("outer", x="1"):
        err = Error(KeyError("k"))
    with span("other"):
        again = Error.wrap(err)
        copied = Error(err)

    assert again is err
    assert copied.source is err.source
    assert copied.span_trace is err.span_trace
    assert copied.render() == err.render()
    assert copied.render().count(CALL_HISTORY_HEADER) == 1
    assert "other" not in copied.render()


def test_from_message_wraps_message_error():
    err = Error.from_message("plain text")
    assert isinstance(err.source, MessageError)
    assert str(err) == "plain text"
    assert repr(err) == "Error('plain text')"


def test_rejects_non_exception_source():
    with pytest.raises(TypeError):
        Error("not an exception")


def test_fields_are_read_only():
    err = Error(ValueError("x"))
    with pytest.raises(AttributeError):
        err.source = ValueError("y")
    with pytest.raises(AttributeError):
        err._span_trace = None
    assert str(err) == "x"


def test_downcast():
    err = Error(FileNotFoundError(2, "No such file or directory"))
    assert isinstance(err.downcast(OSError), FileNotFoundError)
    assert err.downcast(ValueError) is None


def test_backtrace_disabled_by_default():
    err = Error(RuntimeError("boom"))
    assert err.backtrace.status is BacktraceStatus.DISABLED
    assert BACKTRACE_HEADER not in err.render()


def test_backtrace_section_when_captured(monkeypatch):
    monkeypatch.setenv("HELPFUL_BACKTRACE", "1")
    get_settings.cache_clear()

    err = Error(RuntimeError("boom"))

    assert err.backtrace.status is BacktraceStatus.CAPTURED
    rendered = err.render()
    assert f"\n\n{BACKTRACE_HEADER}\n" in rendered
    assert "test_backtrace_section_when_captured" in rendered
    # construction plumbing is not part of the captured stack
    assert "helpful/core/error.py" not in str(err.backtrace)


def test_backtrace_unsupported_is_omitted(monkeypatch):
    monkeypatch.setenv("HELPFUL_BACKTRACE", "true")
    get_settings.cache_clear()
    monkeypatch.setattr(bt, "inspect", SimpleNamespace(currentframe=lambda: None))

    err = Error(RuntimeError("boom"))

    assert err.backtrace.status is BacktraceStatus.UNSUPPORTED
    assert BACKTRACE_HEADER not in err.render()


def test_span_stack_is_per_thread():
    seen = {}

    def worker():
        seen["err"] = Error(RuntimeError("in thread"))

    with span("main-thread"):
        t = threading.Thread(target=worker)
        t.start()
        t.join()

    assert len(seen["err"].span_trace) == 0


def test_copy_and_pickle_keep_the_original_capture():
    with span("load", path="x.json"):
        err = Error(ValueError("bad"))

    with span("elsewhere"):
        copied = copy.copy(err)
        restored = pickle.loads(pickle.dumps(err))

    assert copied.span_trace is err.span_trace
    assert copied.source is err.source
    assert restored.render() == err.render()
    assert [f.name for f in restored.span_trace] == ["load"]
    with pytest.raises(AttributeError):
        restored.source = ValueError("other")
