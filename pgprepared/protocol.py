"""Constants shared with the native PostgreSQL client library.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

# pylint: disable=bad-whitespace

# Result status (ExecStatusType)
EMPTY_QUERY                       = 0
COMMAND_OK                        = 1
TUPLES_OK                         = 2
COPY_OUT                          = 3
COPY_IN                           = 4
BAD_RESPONSE                      = 5
NONFATAL_ERROR                    = 6
FATAL_ERROR                       = 7
COPY_BOTH                         = 8
SINGLE_TUPLE                      = 9

stringifyStatus = {
    EMPTY_QUERY: 'EMPTY_QUERY',
    COMMAND_OK: 'COMMAND_OK',
    TUPLES_OK: 'TUPLES_OK',
    COPY_OUT: 'COPY_OUT',
    COPY_IN: 'COPY_IN',
    BAD_RESPONSE: 'BAD_RESPONSE',
    NONFATAL_ERROR: 'NONFATAL_ERROR',
    FATAL_ERROR: 'FATAL_ERROR',
    COPY_BOTH: 'COPY_BOTH',
    SINGLE_TUPLE: 'SINGLE_TUPLE',
}


def lookup_status(status):
    # type: (int) -> str
    """Return a string-ified version of a result status."""
    return stringifyStatus.get(status, '[UNKNOWN STATUS]')


# Diagnostic fields (PG_DIAG_*)
DIAG_SEVERITY                     = ord('S')
DIAG_SQLSTATE                     = ord('C')
DIAG_MESSAGE_PRIMARY              = ord('M')
DIAG_MESSAGE_DETAIL               = ord('D')
DIAG_MESSAGE_HINT                 = ord('H')
DIAG_CONSTRAINT_NAME              = ord('n')

# Parameter and result formats
FORMAT_TEXT                       = 0
FORMAT_BINARY                     = 1

# Placeholder for a diagnostic field the server did not send
NOT_AVAILABLE                     = 'N/A'

#
# SQLSTATE classes (first two characters of the code)
#

SQLSTATE_FEATURE_NOT_SUPPORTED    = '0A'
SQLSTATE_CONNECTION_EXCEPTION     = '08'
SQLSTATE_DATA_EXCEPTION           = '22'
SQLSTATE_INTEGRITY_VIOLATION      = '23'
SQLSTATE_SYNTAX_OR_ACCESS         = '42'
SQLSTATE_INSUFFICIENT_RESOURCES   = '53'
SQLSTATE_OPERATOR_INTERVENTION    = '57'
SQLSTATE_INTERNAL_ERROR           = 'XX'

DATA_ERRORS = [SQLSTATE_DATA_EXCEPTION]

INTEGRITY_ERRORS = [SQLSTATE_INTEGRITY_VIOLATION]

OPERATIONAL_ERRORS = [SQLSTATE_CONNECTION_EXCEPTION,
                      SQLSTATE_INSUFFICIENT_RESOURCES,
                      SQLSTATE_OPERATOR_INTERVENTION]

INTERNAL_ERRORS = [SQLSTATE_INTERNAL_ERROR]

PROGRAMMING_ERRORS = [SQLSTATE_SYNTAX_OR_ACCESS]

NOT_SUPPORTED_ERRORS = [SQLSTATE_FEATURE_NOT_SUPPORTED]
