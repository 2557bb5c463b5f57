"""Function timing that writes Chrome trace-event JSON files."""

from __future__ import annotations

import functools
import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import IO, Any, Callable, ClassVar, Optional, TypeVar

_log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class ProfileResult:
    name: str
    start: float  # microseconds, fractional
    elapsed_time: int  # whole microseconds
    thread_id: int


@dataclass
class InstrumentationSession:
    name: str


class Instrumentor:
    """Collects profile results into the file of the open session."""

    _instance: ClassVar[Optional["Instrumentor"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._session: Optional[InstrumentationSession] = None
        self._stream: Optional[IO[str]] = None

    @classmethod
    def get(cls) -> "Instrumentor":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @property
    def current_session(self) -> Optional[InstrumentationSession]:
        return self._session

    def begin_session(self, name: str, filepath: str = "results.json") -> None:
        with self._lock:
            if self._session is not None:
                # Close the old session rather than produce malformed output.
                _log.error(
                    "Instrumentor.begin_session('%s') when session '%s' is already open.",
                    name,
                    self._session.name,
                )
                self._end_session_locked()
            try:
                self._stream = open(filepath, "w", encoding="utf-8")
            except OSError:
                _log.error("Instrumentor could not open results file '%s'.", filepath)
                return
            self._session = InstrumentationSession(name)
            self._write('{"otherData": {},"traceEvents":[{}')

    def end_session(self) -> None:
        with self._lock:
            self._end_session_locked()

    def write_profile(self, result: ProfileResult) -> None:
        entry = (
            ",{"
            '"cat":"function",'
            f'"dur":{result.elapsed_time},'
            f'"name":"{result.name}",'
            '"ph":"X",'
            '"pid":0,'
            f'"tid":{result.thread_id},'
            f'"ts":{result.start:.3f}'
            "}"
        )
        with self._lock:
            if self._session is not None:
                self._write(entry)

    def _write(self, text: str) -> None:
        assert self._stream is not None
        self._stream.write(text)
        self._stream.flush()

    def _end_session_locked(self) -> None:
        if self._session is not None:
            self._write("]}")
            assert self._stream is not None
            self._stream.close()
            self._stream = None
            self._session = None


class InstrumentationTimer:
    """Times a block and reports it to an instrumentor when stopped."""

    def __init__(self, name: str, instrumentor: Optional[Instrumentor] = None) -> None:
        self.name = name
        self.instrumentor = instrumentor
        self.stopped = False
        self._start_ns = time.monotonic_ns()

    def stop(self) -> ProfileResult:
        end_ns = time.monotonic_ns()
        result = ProfileResult(
            name=self.name,
            start=self._start_ns / 1000.0,
            elapsed_time=end_ns // 1000 - self._start_ns // 1000,
            thread_id=threading.get_ident(),
        )
        (self.instrumentor or Instrumentor.get()).write_profile(result)
        self.stopped = True
        return result

    def __enter__(self) -> "InstrumentationTimer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.stopped:
            self.stop()


def cleanup_output_string(expr: str, remove: str) -> str:
    """Drop occurrences of ``remove`` and turn double quotes into single quotes.

    After each removal the following character is kept as is, so a
    back-to-back repeat of ``remove`` is only partly removed.
    """
    pattern = re.compile(re.escape(remove) + r"(.|$)", re.DOTALL)
    return pattern.sub(lambda m: m.group(1), expr).replace('"', "'")


def profile_function(func: F) -> F:
    """Decorate a function so each call is timed into the global instrumentor."""
    name = cleanup_output_string(f"{func.__module__}.{func.__qualname__}", "__cdecl ")

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with InstrumentationTimer(name):
            return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]