"""Classes containing the exceptions for reporting errors.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

from typing import Optional  # pylint: disable=unused-import

from . import protocol

__all__ = ['Warning', 'Error', 'InterfaceError', 'DatabaseError',
           'NotConnectedError', 'StatementError', 'DataError',
           'OperationalError', 'IntegrityError', 'InternalError',
           'ProgrammingError', 'NotSupportedError', 'result_error_handler']


class Warning(Exception):
    def __init__(self, value):
        self.__value = value

    def __str__(self):
        return repr(self.__value)


class Error(Exception):
    def __init__(self, value):
        self.__value = value

    def __str__(self):
        return repr(self.__value)

    @property
    def message(self):
        # type: () -> str
        """The unquoted error text."""
        return str(self.__value)


class InterfaceError(Error):
    def __init__(self, value):
        Error.__init__(self, value)


class DatabaseError(Error):
    def __init__(self, value):
        Error.__init__(self, value)


class NotConnectedError(InterfaceError):
    """Raised when the session handle has no live connection."""

    def __init__(self, value='Not connected'):
        InterfaceError.__init__(self, value)


class StatementError(DatabaseError):
    """Raised for any failure compiling, binding, executing or reading a
    prepared statement.

    When the failure was reported by the server the diagnostic fields are
    kept as attributes; otherwise they are None.
    """

    severity = None    # type: Optional[str]
    sqlstate = None    # type: Optional[str]
    detail = None      # type: Optional[str]
    hint = None        # type: Optional[str]
    constraint = None  # type: Optional[str]

    def __init__(self, value):
        DatabaseError.__init__(self, value)


class DataError(StatementError):
    def __init__(self, value):
        StatementError.__init__(self, value)


class OperationalError(StatementError):
    def __init__(self, value):
        StatementError.__init__(self, value)


class IntegrityError(StatementError):
    def __init__(self, value):
        StatementError.__init__(self, value)


class InternalError(StatementError):
    def __init__(self, value):
        StatementError.__init__(self, value)


class ProgrammingError(StatementError):
    def __init__(self, value):
        StatementError.__init__(self, value)


class NotSupportedError(StatementError):
    def __init__(self, value):
        StatementError.__init__(self, value)


def _error_class(sqlstate):
    # type: (Optional[str]) -> type
    if not sqlstate:
        return StatementError
    sqlclass = sqlstate[:2]
    if sqlclass in protocol.DATA_ERRORS:
        return DataError
    if sqlclass in protocol.OPERATIONAL_ERRORS:
        return OperationalError
    if sqlclass in protocol.INTEGRITY_ERRORS:
        return IntegrityError
    if sqlclass in protocol.INTERNAL_ERRORS:
        return InternalError
    if sqlclass in protocol.PROGRAMMING_ERRORS:
        return ProgrammingError
    if sqlclass in protocol.NOT_SUPPORTED_ERRORS:
        return NotSupportedError
    return StatementError


def result_error_handler(prefix, result):
    """Raise a StatementError describing a failed native result.

    The primary message is followed by the severity, SQLSTATE, detail, hint
    and constraint name reported by the server; any field the server did
    not send is shown as N/A.  The SQLSTATE class selects the subclass.

    :type prefix str
    :type result pgprepared.session.NativeResult or None
    """
    if result is None:
        fields = [None] * 5
        error_message = ''
    else:
        fields = [result.error_field(code)
                  for code in (protocol.DIAG_SEVERITY,
                               protocol.DIAG_SQLSTATE,
                               protocol.DIAG_MESSAGE_DETAIL,
                               protocol.DIAG_MESSAGE_HINT,
                               protocol.DIAG_CONSTRAINT_NAME)]
        error_message = result.error_message or ''

    severity, sqlstate, detail, hint, constraint = fields
    shown = [f if f else protocol.NOT_AVAILABLE for f in fields]

    error = _error_class(sqlstate)(
        '%s error: %s Severity: %s State: %s Detail: %s Hint: %s Constraint: %s'
        % (prefix, error_message, shown[0], shown[1], shown[2], shown[3], shown[4]))
    error.severity = severity
    error.sqlstate = sqlstate
    error.detail = detail
    error.hint = hint
    error.constraint = constraint
    raise error
