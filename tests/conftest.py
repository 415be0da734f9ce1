"""
(C) Copyright 2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import logging

import pytest

from typing import Any, Generator  # pylint: disable=unused-import

from pgprepared import StatementExecutor

from . import live_dsn
from .mock_pq import MockSession

_log = logging.getLogger("pgpreparedtest")


@pytest.fixture
def session():
    # type: () -> MockSession
    """A connected in-memory session."""
    return MockSession()


@pytest.fixture
def executor(session):
    # type: (MockSession) -> Generator[StatementExecutor, None, None]
    ex = StatementExecutor(session)
    yield ex
    ex.close()


@pytest.fixture
def pgconn():
    # type: () -> Generator[Any, None, None]
    """An open libpq connection to the server named by the environment."""
    pq = pytest.importorskip('psycopg.pq')
    dsn = live_dsn()
    if dsn is None:
        pytest.skip("No live server configured")

    _log.info("Connecting to the live server")
    conn = pq.PGconn.connect(dsn.encode('utf-8'))
    if conn.status != pq.ConnStatus.OK:
        msg = conn.error_message.decode('utf-8', 'replace')
        conn.finish()
        pytest.fail("Cannot connect to the live server: %s" % (msg))

    yield conn

    conn.finish()


@pytest.fixture
def pq_session(pgconn):
    # type: (Any) -> Any
    from pgprepared.pqsession import PQSessionHandle
    return PQSessionHandle(pgconn)
