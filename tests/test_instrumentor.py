import json
import threading

from overengine.instrumentor import (
    InstrumentationTimer,
    Instrumentor,
    ProfileResult,
    cleanup_output_string,
    profile_function,
)


def test_cleanup_removes_and_replaces_quotes():
    assert cleanup_output_string('void __cdecl f("x")', "__cdecl ") == "void f('x')"
    assert cleanup_output_string("plain", "__cdecl ") == "plain"
    assert cleanup_output_string("abc", "") == "abc"


def test_cleanup_keeps_character_after_removal():
    # The character right after a removed match is copied unchecked.
    assert cleanup_output_string("xxy", "x") == "xy"


def test_session_writes_valid_trace(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("run", str(path))
    assert inst.current_session.name == "run"
    with InstrumentationTimer("work", inst) as timer:
        pass
    assert timer.stopped
    inst.end_session()
    assert inst.current_session is None
    data = json.loads(path.read_text())
    events = data["traceEvents"]
    assert events[0] == {}
    assert events[1]["name"] == "work"
    assert events[1]["ph"] == "X"
    assert events[1]["cat"] == "function"
    assert events[1]["tid"] == threading.get_ident()
    assert events[1]["dur"] >= 0


def test_write_profile_format(tmp_path):
    path = tmp_path / "p.json"
    inst = Instrumentor()
    inst.begin_session("s", str(path))
    inst.write_profile(ProfileResult("f", 1.5, 7, 3))
    inst.end_session()
    text = path.read_text()
    assert '"dur":7,' in text
    assert '"ts":1.500}' in text
    assert json.loads(text)["traceEvents"][1]["tid"] == 3


def test_begin_twice_closes_first(tmp_path):
    first, second = tmp_path / "a.json", tmp_path / "b.json"
    inst = Instrumentor()
    inst.begin_session("a", str(first))
    inst.begin_session("b", str(second))
    assert json.loads(first.read_text())["traceEvents"] == [{}]
    assert inst.current_session.name == "b"
    inst.end_session()
    assert json.loads(second.read_text())["traceEvents"] == [{}]


def test_bad_path_opens_no_session(tmp_path):
    inst = Instrumentor()
    inst.begin_session("x", str(tmp_path / "missing" / "t.json"))
    assert inst.current_session is None
    inst.write_profile(ProfileResult("f", 0.0, 0, 0))
    assert inst.current_session is None


def test_stop_returns_result():
    inst = Instrumentor()
    result = InstrumentationTimer("t", inst).stop()
    assert result.name == "t"
    assert result.elapsed_time >= 0


def test_profile_function_uses_global_instrumentor(tmp_path):
    path = tmp_path / "g.json"

    @profile_function
    def compute(a, b):
        return a + b

    inst = Instrumentor.get()
    assert Instrumentor.get() is inst
    inst.begin_session("global", str(path))
    try:
        assert compute(2, 3) == 5
    finally:
        inst.end_session()
    events = json.loads(path.read_text())["traceEvents"]
    assert events[1]["name"].endswith("compute")