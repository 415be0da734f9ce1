"""The connection seen by a prepared statement.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
SessionHandle -- Base class for a live connection to the server.
NativeResult -- Base class for a result returned by the server.
"""

__all__ = ['SessionHandle', 'NativeResult']

# A statement executor only needs a narrow slice of a connection: whether it
# is still up, a lock to serialize round trips, and four native calls.  The
# classes here define that slice; pqsession implements it on top of libpq and
# the tests implement it in memory.

import threading

from typing import ContextManager, Optional, Sequence  # pylint: disable=unused-import

from . import protocol


class NativeResult(object):
    """A result returned by one native call.

    Rows and columns are zero-based.  Values are the raw bytes sent by the
    server (text format unless requested otherwise).
    """

    status = protocol.FATAL_ERROR  # type: int
    error_message = ''             # type: str

    def error_field(self, code):
        # type: (int) -> Optional[str]
        """Return a diagnostic field (see protocol.DIAG_*) or None."""
        raise NotImplementedError

    @property
    def field_count(self):
        # type: () -> int
        raise NotImplementedError

    @property
    def tuple_count(self):
        # type: () -> int
        raise NotImplementedError

    def field_name(self, column):
        # type: (int) -> str
        raise NotImplementedError

    def field_length(self, column):
        # type: (int) -> int
        """Declared size of the column type, negative if variable."""
        raise NotImplementedError

    def field_type(self, column):
        # type: (int) -> int
        raise NotImplementedError

    def field_modifier(self, column):
        # type: (int) -> int
        """Type modifier of the column, -1 if none."""
        raise NotImplementedError

    def get_length(self, row, column):
        # type: (int, int) -> int
        raise NotImplementedError

    def get_value(self, row, column):
        # type: (int, int) -> Optional[bytes]
        raise NotImplementedError

    def is_null(self, row, column):
        # type: (int, int) -> bool
        raise NotImplementedError

    def command_tuples(self):
        # type: () -> Optional[str]
        """Row count of a command as text, e.g. '3' after 'UPDATE 3'."""
        raise NotImplementedError

    def clear(self):
        # type: () -> None
        """Free the result."""
        raise NotImplementedError


class SessionHandle(object):
    """A live connection shared by any number of prepared statements.

    Each native call is one round trip with the server.  Callers hold lock()
    for the duration of a single round trip only.
    """

    def __init__(self):
        # type: () -> None
        self.__mutex = threading.Lock()

    def lock(self):
        # type: () -> ContextManager
        """Return the exclusive lock guarding round trips on this session."""
        return self.__mutex

    def is_connected(self):
        # type: () -> bool
        raise NotImplementedError

    def compile_prepared(self, name, sql, param_count):
        # type: (str, str, int) -> Optional[NativeResult]
        """Create the server-side prepared statement name for sql."""
        raise NotImplementedError

    def describe_prepared(self, name):
        # type: (str) -> Optional[NativeResult]
        """Describe the result columns of prepared statement name."""
        raise NotImplementedError

    def execute_prepared(self, name,       # type: str
                         param_count,      # type: int
                         values,           # type: Sequence[Optional[bytes]]
                         lengths,          # type: Sequence[int]
                         formats,          # type: Sequence[int]
                         result_format=protocol.FORMAT_TEXT  # type: int
                         ):
        # type: (...) -> Optional[NativeResult]
        """Execute prepared statement name with the given parameters."""
        raise NotImplementedError

    def deallocate_prepared(self, name):
        # type: (str) -> Optional[NativeResult]
        """Drop prepared statement name from the server."""
        raise NotImplementedError
