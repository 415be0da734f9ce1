"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import os
import logging

from typing import Optional  # pylint: disable=unused-import

_log = logging.getLogger("pgpreparedtest")

# libpq connection string of a server to run the live tests against.
DSN_VARIABLE = 'PGPREPARED_TEST_DSN'


def live_dsn():
    # type: () -> Optional[str]
    """Return the connection string for live tests, or None to skip them."""
    dsn = os.environ.get(DSN_VARIABLE)
    if dsn:
        _log.info("Live tests use %s", DSN_VARIABLE)
    return dsn or None
