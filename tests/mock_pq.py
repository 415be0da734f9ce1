"""An in-memory session standing in for libpq.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

from typing import Any, Callable, Dict, List  # pylint: disable=unused-import
from typing import Optional, Sequence, Tuple  # pylint: disable=unused-import

from pgprepared import protocol
from pgprepared.session import NativeResult, SessionHandle

# (name, declared length, type id, modifier)
Field = Tuple[str, int, int, int]

INT4_OID = 23
TEXT_OID = 25
VARCHAR_OID = 1043
NUMERIC_OID = 1700


class MockResult(NativeResult):
    """A result with scripted status, columns and rows."""

    def __init__(self, status=protocol.COMMAND_OK,  # type: int
                 fields=(),                         # type: Sequence[Field]
                 rows=(),                           # type: Sequence[Sequence[Optional[bytes]]]
                 cmd_tuples=None,                   # type: Optional[str]
                 error_message='',                  # type: str
                 error_fields=None,                 # type: Optional[Dict[int, str]]
                 field_count=None                   # type: Optional[int]
                 ):
        # type: (...) -> None
        self.status = status
        self.fields = list(fields)
        self.rows = [list(r) for r in rows]
        self.cmd_tuples = cmd_tuples
        self.error_message = error_message
        self.error_fields = error_fields or {}
        self._field_count = field_count
        self.cleared = 0

    def error_field(self, code):
        return self.error_fields.get(code)

    @property
    def field_count(self):
        if self._field_count is not None:
            return self._field_count
        return len(self.fields)

    @property
    def tuple_count(self):
        return len(self.rows)

    def field_name(self, column):
        return self.fields[column][0]

    def field_length(self, column):
        return self.fields[column][1]

    def field_type(self, column):
        return self.fields[column][2]

    def field_modifier(self, column):
        return self.fields[column][3]

    def get_value(self, row, column):
        return self.rows[row][column]

    def get_length(self, row, column):
        value = self.rows[row][column]
        return -1 if value is None else len(value)

    def is_null(self, row, column):
        return self.rows[row][column] is None

    def command_tuples(self):
        return self.cmd_tuples

    def clear(self):
        self.cleared += 1


def command_ok(cmd_tuples=None):
    # type: (Optional[str]) -> MockResult
    return MockResult(protocol.COMMAND_OK, cmd_tuples=cmd_tuples)


def described(fields):
    # type: (Sequence[Field]) -> MockResult
    return MockResult(protocol.COMMAND_OK, fields=fields)


def tuples(fields, rows):
    # type: (Sequence[Field], Sequence[Sequence[Optional[bytes]]]) -> MockResult
    return MockResult(protocol.TUPLES_OK, fields=fields, rows=rows)


def failed(message, **error_fields):
    # type: (str, str) -> MockResult
    """A FATAL_ERROR result; keywords are protocol.DIAG_* names without the prefix."""
    codes = {getattr(protocol, 'DIAG_' + k.upper()): v for k, v in error_fields.items()}
    return MockResult(protocol.FATAL_ERROR, error_message=message, error_fields=codes)


class MockSession(SessionHandle):
    """A session whose native calls are answered by scripted callables.

    Every result handed out is kept in results so tests can check it was
    cleared exactly once.  locked records, for each native call, whether the
    session lock was held while it ran.
    """

    def __init__(self):
        super(MockSession, self).__init__()
        self.connected = True
        self.calls = []    # type: List[Tuple[Any, ...]]
        self.results = []  # type: List[MockResult]
        self.locked = []   # type: List[bool]
        self.on_compile = lambda name, sql, count: command_ok()    # type: Callable[..., Optional[MockResult]]
        self.on_describe = lambda name: described([])             # type: Callable[..., Optional[MockResult]]
        self.on_execute = lambda name, count, values, lengths, formats, fmt: command_ok('0')  # type: Callable[..., Optional[MockResult]]
        self.on_deallocate = lambda name: command_ok()            # type: Callable[..., Optional[MockResult]]

    def _answer(self, call, handler, *args):
        self.calls.append((call,) + args)
        self.locked.append(self.lock().locked())
        result = handler(*args)
        if result is not None:
            self.results.append(result)
        return result

    def calls_to(self, call):
        # type: (str) -> List[Tuple[Any, ...]]
        return [c for c in self.calls if c[0] == call]

    def is_connected(self):
        return self.connected

    def compile_prepared(self, name, sql, param_count):
        return self._answer('compile', self.on_compile, name, sql, param_count)

    def describe_prepared(self, name):
        return self._answer('describe', self.on_describe, name)

    def execute_prepared(self, name, param_count, values, lengths, formats,
                         result_format=protocol.FORMAT_TEXT):
        return self._answer('execute', self.on_execute, name, param_count,
                            list(values), list(lengths), list(formats),
                            result_format)

    def deallocate_prepared(self, name):
        return self._answer('deallocate', self.on_deallocate, name)
