"""Execute a server-side prepared statement and read its result.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
StatementExecutor -- Compile, bind, execute and fetch one SQL statement.
"""

__all__ = ['StatementExecutor']

import copy
import logging
import uuid

from typing import Any, Dict, Iterator, List  # pylint: disable=unused-import
from typing import Optional, Sequence, Tuple  # pylint: disable=unused-import

from .exception import NotConnectedError, StatementError, result_error_handler
from .placeholder import count_placeholders
from .result_set import ResultHandle
from .statement import State, MetaColumn, InputParameter, OutputParameter
from .statement import transition
from . import datatype
from . import protocol
from . import session  # pylint: disable=unused-import

_log = logging.getLogger(__name__)


def _statement_name():
    # type: () -> str
    """Return a fresh name for a server-side prepared statement.

    The name is a time based UUID; it must not start with a digit and the
    server does not accept dashes in it.
    """
    return 'p' + str(uuid.uuid1()).replace('-', 'p')


def _parse_row_count(text):
    # type: (Optional[str]) -> Optional[int]
    """Return the row count in a command tag, or None if there isn't one."""
    if not text:
        return None
    text = text.strip()
    if not text.isdigit() or not text.isascii():
        return None
    return int(text)


class StatementExecutor(object):
    """Run one SQL statement as a prepared statement on a session.

    The statement moves from INITED to COMPILED (prepare) to EXECUTED
    (execute), and may be executed any number of times once compiled.

        executor = StatementExecutor(handle)
        executor.prepare("SELECT name FROM users WHERE id = $1")
        executor.bind_params([42])
        executor.execute()
        while executor.fetch():
            print(executor.result_column(0).value)
        executor.close()

    Public Functions:
    prepare -- Compile the statement on the server and describe its result.
    bind_params -- Record the parameters for the next execute.
    execute -- Run the compiled statement with the bound parameters.
    fetch -- Read the next row into the output cells.
    fetchone -- Return the next row as a tuple of values.
    get_affected_row_count -- Rows returned or affected by the last execute.
    columns_returned -- Number of result columns.
    meta_column -- Description of a result column.
    result_column -- Cell of the current row for a result column.
    close -- Drop the prepared statement and free the result.
    """

    __result = None  # type: ResultHandle

    def __init__(self, session_handle):
        # type: (session.SessionHandle) -> None
        """Create an executor using session_handle for every round trip."""
        self.__session = session_handle
        self.__state = State.INITED
        self.__sql = ''
        self.__prepared_name = ''
        self.__placeholder_count = 0
        self.__columns = []      # type: List[MetaColumn]
        self.__parameters = ()   # type: Tuple[InputParameter, ...]
        self.__result = ResultHandle()
        self.__output_row = []   # type: List[OutputParameter]
        self.__affected_row_count = 0
        self.__current_row = 0

    def __del__(self):
        try:
            self.close()
        except Exception:  # pylint: disable=broad-except
            pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self):
        # type: () -> Iterator[Tuple[Optional[bytes], ...]]
        while True:
            row = self.fetchone()
            if row is None:
                return
            yield row

    @property
    def state(self):
        # type: () -> State
        return self.__state

    @property
    def sql(self):
        # type: () -> str
        return self.__sql

    @property
    def prepared_name(self):
        # type: () -> str
        return self.__prepared_name

    @property
    def placeholder_count(self):
        # type: () -> int
        return self.__placeholder_count

    @property
    def columns(self):
        # type: () -> Tuple[MetaColumn, ...]
        return tuple(self.__columns)

    @property
    def parameters(self):
        # type: () -> Tuple[InputParameter, ...]
        return self.__parameters

    @property
    def current_row(self):
        # type: () -> int
        return self.__current_row

    @property
    def affected_row_count(self):
        # type: () -> int
        return self.__affected_row_count

    @property
    def description(self):
        # type: () -> Optional[List[Tuple[Any, ...]]]
        """PEP 249 description of the result columns, None if there are none."""
        if not self.__columns:
            return None
        return [column.description() for column in self.__columns]

    def statement_config(self):
        # type: () -> Dict[str, Any]
        """Returns a copy of the statement's current data.

        Modifying the returned values has no effect on the executor.
        """
        return {'sql': self.__sql,
                'prepared_name': self.__prepared_name,
                'state': self.__state.value,
                'placeholder_count': self.__placeholder_count,
                'columns': [copy.copy(c) for c in self.__columns],
                'affected_row_count': self.__affected_row_count}

    def _check_connected(self):
        # type: () -> None
        """Check if the session is available.

        :raises NotConnectedError: If the session has no live connection.
        """
        if not self.__session.is_connected():
            raise NotConnectedError()

    def prepare(self, sql):
        # type: (str) -> None
        """Compile sql as a prepared statement and describe its result.

        Preparing an executor that is already compiled does nothing; use a
        new executor for a different statement.

        :raises NotConnectedError: If the session is not connected.
        :raises StatementError: If the server rejects the statement.
        """
        self._check_connected()

        if self.__state in (State.COMPILED, State.EXECUTED):
            return

        target = transition(self.__state, 'prepare')

        # Whatever happens the old metadata is now obsolete.
        self.__placeholder_count = 0
        self.__sql = ''
        self.__prepared_name = ''
        self.__columns = []
        self.__parameters = ()
        self.clear_results()

        placeholder_count = count_placeholders(sql)
        name = _statement_name()

        with self.__session.lock():
            res = ResultHandle(self.__session.compile_prepared(name, sql, placeholder_count))

        with res:
            if res.status != protocol.COMMAND_OK:
                raise StatementError('postgresql_stmt_prepare error: %s %s'
                                     % (self._error_message(res), sql))

        try:
            with self.__session.lock():
                res = ResultHandle(self.__session.describe_prepared(name))

            with res:
                if res.status != protocol.COMMAND_OK:
                    raise StatementError('postgresql_stmt_describe error: %s %s'
                                         % (self._error_message(res), sql))
                columns = self._describe_columns(res.result)
        except Exception:
            # The statement exists on the server but this executor will not
            # remember its name.
            self._deallocate(name)
            raise

        self.__sql = sql
        self.__prepared_name = name
        self.__placeholder_count = placeholder_count
        self.__columns = columns
        _log.debug("Compiled %s with %d parameter(s) and %d column(s)",
                   name, placeholder_count, len(columns))

        self.__state = target

    @staticmethod
    def _error_message(res):
        # type: (ResultHandle) -> str
        if res.result is None:
            return ''
        return res.result.error_message or ''

    @staticmethod
    def _describe_columns(result):
        # type: (Any) -> List[MetaColumn]
        columns = []
        for i in range(max(result.field_count, 0)):
            length = result.field_length(i)
            precision = result.field_modifier(i)

            # A variable length type reports its length as the modifier.
            if length < 0 and precision > 0:
                length = precision
                precision = -1

            # Nullability is not part of a statement description, and the
            # cells are always read as text.
            columns.append(MetaColumn(i, result.field_name(i), datatype.STRING,
                                      max(length, 0), max(precision, 0),
                                      True, result.field_type(i)))
        return columns

    def bind_params(self, parameters):
        # type: (Sequence[Any]) -> None
        """Record the parameters for the next execute.

        Each parameter is an InputParameter or a Python value converted with
        datatype.to_input_parameter().

        :raises StatementError: If the count differs from the number of
                                placeholders in the statement.
        """
        self._check_connected()
        transition(self.__state, 'bind')

        if len(parameters) != self.__placeholder_count:
            raise StatementError('incorrect bind parameters count for SQL Statement: '
                                 + self.__sql)

        self.__parameters = tuple(datatype.to_input_parameter(p) for p in parameters)

    def execute(self):
        # type: () -> None
        """Execute the compiled statement with the bound parameters.

        :raises NotConnectedError: If the session is not connected.
        :raises StatementError: If the statement is not compiled, the
                                parameters don't match, or the server
                                reports an error.
        """
        self._check_connected()
        target = transition(self.__state, 'execute')

        if self.__placeholder_count != 0 and \
                len(self.__parameters) != self.__placeholder_count:
            raise StatementError('Count of Parameters in Statement different than supplied parameters')

        try:
            values = [p.value for p in self.__parameters]
            lengths = [p.size for p in self.__parameters]
            formats = [p.format for p in self.__parameters]
        except MemoryError:
            raise StatementError('Memory Allocation Error')

        self.clear_results()

        with self.__session.lock():
            res = ResultHandle(self.__session.execute_prepared(
                self.__prepared_name, self.__placeholder_count,
                values, lengths, formats, protocol.FORMAT_TEXT))

        if res.status not in (protocol.COMMAND_OK, protocol.TUPLES_OK):
            with res:
                result_error_handler('postgresql_stmt_execute', res.result)

        # The result is kept: rows are read from it by fetch().
        self.__result = res

        if res.status == protocol.TUPLES_OK:
            tuple_count = res.result.tuple_count
            if tuple_count >= 0:
                self.__affected_row_count = tuple_count
        else:
            count = _parse_row_count(res.result.command_tuples())
            if count is not None:
                self.__affected_row_count = count
                # Commands have no rows to fetch.
                self.__current_row = count

        _log.debug("Executed %s: %d row(s)", self.__prepared_name,
                   self.__affected_row_count)
        self.__state = target

    def fetch(self):
        # type: () -> bool
        """Read the next row into the result columns.

        :returns: False if there are no more rows.
        """
        self._check_connected()
        transition(self.__state, 'fetch')

        column_count = self.columns_returned()

        if not self.__output_row:
            self.__output_row = [OutputParameter() for _ in range(column_count)]

        if self.__current_row == self.__affected_row_count:
            return False

        if column_count == 0 or self.__result.status != protocol.TUPLES_OK:
            return False

        result = self.__result.result
        row = self.__current_row
        for i in range(column_count):
            length = result.get_length(row, i)
            self.__output_row[i].set_values(datatype.POSTGRESQL_TYPE_STRING,
                                            self.__columns[i].type_code,
                                            row,
                                            result.get_value(row, i),
                                            0 if length == -1 else length,
                                            result.is_null(row, i))

        self.__current_row += 1
        return True

    def fetchone(self):
        # type: () -> Optional[Tuple[Optional[bytes], ...]]
        """Fetch the next row and return its values, None if there are no more."""
        if not self.fetch():
            return None
        return tuple(None if cell.is_null else cell.value
                     for cell in self.__output_row)

    def get_affected_row_count(self):
        # type: () -> int
        return self.__affected_row_count

    def columns_returned(self):
        # type: () -> int
        return len(self.__columns)

    def meta_column(self, position):
        # type: (int) -> MetaColumn
        if position < 0 or position >= self.columns_returned():
            raise StatementError('Invalid column number for metaColumn')
        return self.__columns[position]

    def result_column(self, position):
        # type: (int) -> OutputParameter
        if position < 0 or position >= self.columns_returned():
            raise StatementError('Invalid column number for resultColumn')
        if position >= len(self.__output_row):
            # Nothing fetched yet.
            return OutputParameter()
        return self.__output_row[position]

    def clear_results(self):
        # type: () -> None
        """Free the result of the last execute and reset the row counters."""
        self.__result.release()
        self.__output_row = []
        self.__affected_row_count = 0
        self.__current_row = 0

    def _deallocate(self, name):
        # type: (str) -> None
        """Drop prepared statement name from the server if still connected.

        Never raises: failures are logged and discarded.
        """
        try:
            if self.__session.is_connected():
                with self.__session.lock():
                    res = ResultHandle(self.__session.deallocate_prepared(name))
                res.release()
        except Exception:  # pylint: disable=broad-except
            _log.debug("Failed to deallocate %s", name, exc_info=True)

    def close(self):
        # type: () -> None
        """Drop the prepared statement from the server and free the result.

        Never raises: failures are logged and discarded.  Closing twice is
        harmless.
        """
        name = self.__prepared_name
        if self.__state in (State.COMPILED, State.EXECUTED):
            self._deallocate(name)

        try:
            self.clear_results()
        except Exception:  # pylint: disable=broad-except
            _log.debug("Failed to release the result of %s", name, exc_info=True)

        self.__state = State.INITED
        self.__prepared_name = ''
        self.__placeholder_count = 0
        self.__columns = []
        self.__parameters = ()
