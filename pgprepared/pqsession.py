"""A SessionHandle on top of libpq.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
PQSessionHandle -- SessionHandle for a psycopg.pq.PGconn.
PQResult -- NativeResult for a psycopg.pq.PGresult.

The connection itself is opened and closed by the caller:

    pgconn = psycopg.pq.PGconn.connect(b'dbname=test')
    handle = PQSessionHandle(pgconn)
"""

__all__ = ['PQSessionHandle', 'PQResult']

import codecs
import copy
import logging

from typing import Any, Dict, Mapping, Optional, Sequence  # pylint: disable=unused-import

import psycopg
from psycopg import pq

from .exception import InterfaceError, OperationalError
from . import protocol
from . import session

DEFAULT_ENCODING = 'utf-8'

_log = logging.getLogger(__name__)


def server_encoding(pgconn):
    # type: (pq.abc.PGconn) -> str
    """Return the Python codec for the connection's client_encoding.

    Falls back to utf-8 when the server reports no encoding or one with no
    Python codec of the same name (e.g. SQL_ASCII).
    """
    name = pgconn.parameter_status(b'client_encoding')
    if not name:
        return DEFAULT_ENCODING
    try:
        return codecs.lookup(name.decode('ascii')).name
    except (LookupError, UnicodeDecodeError):
        _log.debug("No codec for client_encoding %r, using %s", name, DEFAULT_ENCODING)
        return DEFAULT_ENCODING


def _round_trip(call, *args):
    """Run one libpq call, reporting a lost connection as OperationalError."""
    try:
        return call(*args)
    except psycopg.OperationalError as e:
        raise OperationalError(str(e))


class PQResult(session.NativeResult):
    """A libpq result."""

    def __init__(self, pgresult, encoding=DEFAULT_ENCODING):
        # type: (pq.abc.PGresult, str) -> None
        self.__pgresult = pgresult
        self.__encoding = encoding
        self.__cell = None   # type: Optional[tuple]
        self.__value = None  # type: Optional[bytes]

    def _decode(self, data):
        # type: (Optional[bytes]) -> Optional[str]
        if data is None:
            return None
        return data.decode(self.__encoding, 'replace')

    @property
    def status(self):  # type: ignore[override]
        # type: () -> int
        return int(self.__pgresult.status)

    @property
    def error_message(self):  # type: ignore[override]
        # type: () -> str
        return self._decode(self.__pgresult.error_message) or ''

    def error_field(self, code):
        # type: (int) -> Optional[str]
        return self._decode(self.__pgresult.error_field(pq.DiagnosticField(code)))

    @property
    def field_count(self):
        # type: () -> int
        return self.__pgresult.nfields

    @property
    def tuple_count(self):
        # type: () -> int
        return self.__pgresult.ntuples

    def field_name(self, column):
        # type: (int) -> str
        return self._decode(self.__pgresult.fname(column)) or ''

    def field_length(self, column):
        # type: (int) -> int
        return self.__pgresult.fsize(column)

    def field_type(self, column):
        # type: (int) -> int
        return self.__pgresult.ftype(column)

    def field_modifier(self, column):
        # type: (int) -> int
        return self.__pgresult.fmod(column)

    def get_value(self, row, column):
        # type: (int, int) -> Optional[bytes]
        # Length, value and null flag of a cell are read together: copy the
        # cell out of the result once.
        if self.__cell != (row, column):
            self.__value = self.__pgresult.get_value(row, column)
            self.__cell = (row, column)
        return self.__value

    def get_length(self, row, column):
        # type: (int, int) -> int
        value = self.get_value(row, column)
        return 0 if value is None else len(value)

    def is_null(self, row, column):
        # type: (int, int) -> bool
        return self.get_value(row, column) is None

    def command_tuples(self):
        # type: () -> Optional[str]
        count = self.__pgresult.command_tuples
        if count is None:
            return None
        return str(count)

    def clear(self):
        # type: () -> None
        self.__cell = None
        self.__value = None
        self.__pgresult.clear()


class PQSessionHandle(session.SessionHandle):
    """A session over an open libpq connection."""

    __config = None  # type: Dict[str, Any]

    def __init__(self, pgconn, options=None):
        # type: (pq.abc.PGconn, Optional[Mapping[str, str]]) -> None
        """Wrap an open connection.

        :param pgconn: Connection returned by psycopg.pq.PGconn.connect().
        :param options: Session options.  'encoding' names the client
                        encoding used for SQL text and names (default: the
                        connection's client_encoding).
        """
        super(PQSessionHandle, self).__init__()
        if pgconn is None:
            raise InterfaceError("No connection provided.")
        self.__pgconn = pgconn
        options = options or {}
        self.__encoding = options.get('encoding') or server_encoding(pgconn)
        self.__config = {'options': copy.deepcopy(dict(options)),
                         'encoding': self.__encoding}

    def connection_config(self):
        # type: () -> Dict[str, Any]
        """Returns a copy of the connection configuration.

        Configuration:
          connected        :bool: True if the connection is active
          db_name          :str:  name of the connected database
          encoding         :str:  client encoding for SQL text
          host             :str:  server host
          options          :dict: dictionary of session options
          protocol_version :int:  frontend/backend protocol version
          server_version   :int:  server version number
          user             :str:  name of the connected user

        :returns: Copy of the connection config names and values.
        """
        config = copy.deepcopy(self.__config)
        config['connected'] = self.is_connected()
        if config['connected']:
            config['host'] = self.__pgconn.host.decode(self.__encoding)
            config['db_name'] = self.__pgconn.db.decode(self.__encoding)
            config['user'] = self.__pgconn.user.decode(self.__encoding)
            config['protocol_version'] = self.__pgconn.protocol_version
            config['server_version'] = self.__pgconn.server_version
        return config

    def is_connected(self):
        # type: () -> bool
        return self.__pgconn.status == pq.ConnStatus.OK

    def _result(self, pgresult):
        # type: (Optional[pq.abc.PGresult]) -> Optional[PQResult]
        if pgresult is None:
            return None
        return PQResult(pgresult, self.__encoding)

    def compile_prepared(self, name, sql, param_count):
        # type: (str, str, int) -> Optional[session.NativeResult]
        # Type 0 lets the server infer each parameter's type.
        return self._result(_round_trip(
            self.__pgconn.prepare,
            name.encode(self.__encoding), sql.encode(self.__encoding),
            [0] * param_count))

    def describe_prepared(self, name):
        # type: (str) -> Optional[session.NativeResult]
        return self._result(_round_trip(
            self.__pgconn.describe_prepared, name.encode(self.__encoding)))

    def execute_prepared(self, name,       # type: str
                         param_count,      # type: int
                         values,           # type: Sequence[Optional[bytes]]
                         lengths,          # type: Sequence[int]
                         formats,          # type: Sequence[int]
                         result_format=protocol.FORMAT_TEXT  # type: int
                         ):
        # type: (...) -> Optional[session.NativeResult]
        # libpq takes lengths from the values themselves.
        return self._result(_round_trip(
            self.__pgconn.exec_prepared,
            name.encode(self.__encoding),
            list(values[:param_count]) if param_count else None,
            list(formats[:param_count]) if param_count else None,
            result_format))

    def deallocate_prepared(self, name):
        # type: (str) -> Optional[session.NativeResult]
        return self._result(_round_trip(
            self.__pgconn.exec_, b'DEALLOCATE ' + name.encode(self.__encoding)))
