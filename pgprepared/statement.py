"""Prepared statement state and the values flowing through a statement.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
State -- Lifecycle state of a prepared statement.
MetaColumn -- Description of one result column.
InputParameter -- One bound parameter value.
OutputParameter -- One cell of the current output row.

Exported Functions:
transition -- Validate an operation against a state and return the next state.
"""

__all__ = ['State', 'transition', 'MetaColumn', 'InputParameter',
           'OutputParameter']

import enum

from typing import Any, Dict, Optional, Tuple  # pylint: disable=unused-import

from .exception import StatementError


class State(enum.Enum):
    """Lifecycle state of a prepared statement."""

    INITED = 'inited'
    COMPILED = 'compiled'
    EXECUTED = 'executed'


# operation -> {current state: next state}
_TRANSITIONS = {
    'prepare': {State.INITED: State.COMPILED},
    'bind': {State.COMPILED: State.COMPILED,
             State.EXECUTED: State.EXECUTED},
    'execute': {State.COMPILED: State.EXECUTED,
                State.EXECUTED: State.EXECUTED},
    'fetch': {State.EXECUTED: State.EXECUTED},
}  # type: Dict[str, Dict[State, State]]

_REJECTED = {
    'prepare': 'Statement is already compiled',
    'bind': 'Statement is not compiled yet',
    'execute': 'Statement is not compiled yet',
    'fetch': 'Statement is not yet executed',
}


def transition(state, operation):
    # type: (State, str) -> State
    """Return the state reached by running operation from state.

    :raises StatementError: If operation is not allowed from state.
    """
    try:
        return _TRANSITIONS[operation][state]
    except KeyError:
        raise StatementError(_REJECTED.get(operation, 'Invalid operation %s' % operation))


class MetaColumn(object):
    """Description of one column of a statement result."""

    def __init__(self, position,    # type: int
                 name,              # type: str
                 type_object,       # type: Any
                 length=0,          # type: int
                 precision=0,       # type: int
                 nullable=True,     # type: bool
                 type_code=0        # type: int
                 ):
        # type: (...) -> None
        """Create a column description.

        :param position: Zero-based column position.
        :param name: Column name as reported by the server.
        :param type_object: Logical type of the column.
        :param length: Declared length, 0 if unknown.
        :param precision: Declared precision, 0 if unknown.
        :param nullable: Whether the column may hold NULL.
        :param type_code: Server type id of the column.
        """
        self.position = position
        self.name = name
        self.type = type_object
        self.length = length
        self.precision = precision
        self.nullable = nullable
        self.type_code = type_code

    def description(self):
        # type: () -> Tuple[str, Any, Optional[int], Optional[int], Optional[int], Optional[int], bool]
        """Return the PEP 249 description sequence for this column."""
        return (self.name, self.type, None, self.length or None,
                self.precision or None, None, self.nullable)

    def __eq__(self, other):
        if not isinstance(other, MetaColumn):
            return NotImplemented
        return (self.position, self.name, self.type, self.length,
                self.precision, self.nullable, self.type_code) == \
            (other.position, other.name, other.type, other.length,
             other.precision, other.nullable, other.type_code)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore

    def __repr__(self):
        return 'MetaColumn(%d, %r, length=%d, precision=%d)' % (
            self.position, self.name, self.length, self.precision)


class InputParameter(object):
    """A parameter value ready to be sent with an execute.

    The value is the raw representation the server will parse: UTF-8 text
    for text format parameters, or the binary wire form.  None is NULL.
    """

    def __init__(self, value, is_binary=False):
        # type: (Optional[bytes], bool) -> None
        self.value = value
        self.is_binary = is_binary

    @property
    def is_null(self):
        # type: () -> bool
        return self.value is None

    @property
    def size(self):
        # type: () -> int
        """Length of the value in bytes, 0 for NULL."""
        return 0 if self.value is None else len(self.value)

    @property
    def format(self):
        # type: () -> int
        return 1 if self.is_binary else 0

    def __eq__(self, other):
        if not isinstance(other, InputParameter):
            return NotImplemented
        return self.value == other.value and self.is_binary == other.is_binary

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore

    def __repr__(self):
        return 'InputParameter(%r, is_binary=%r)' % (self.value, self.is_binary)


class OutputParameter(object):
    """One cell of the row most recently fetched."""

    native_type = None    # type: Optional[int]
    type_code = 0         # type: int
    row = 0               # type: int
    value = None          # type: Optional[bytes]
    size = 0              # type: int
    is_null = True        # type: bool

    def set_values(self, native_type, type_code, row, value, size, is_null):
        # type: (int, int, int, Optional[bytes], int, bool) -> None
        """Record the cell read from the result."""
        self.native_type = native_type
        self.type_code = type_code
        self.row = row
        self.value = value
        self.size = size
        self.is_null = is_null

    def __repr__(self):
        return 'OutputParameter(row=%d, value=%r, is_null=%r)' % (
            self.row, self.value, self.is_null)
