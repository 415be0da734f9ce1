"""Ownership of native result objects.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['ResultHandle']

import logging

from typing import Optional  # pylint: disable=unused-import

from . import session  # pylint: disable=unused-import

_log = logging.getLogger(__name__)


class ResultHandle(object):
    """Single owner of a native result.

    The result is released exactly once: by release(), or when a with block
    over the handle exits.  A result handed over with detach() is no longer
    released by this handle.

        with ResultHandle(session.describe_prepared(name)) as res:
            ...   # res.result is cleared on exit, even on error
    """

    def __init__(self, result=None):
        # type: (Optional[session.NativeResult]) -> None
        self.__result = result

    @property
    def result(self):
        # type: () -> Optional[session.NativeResult]
        return self.__result

    @property
    def status(self):
        # type: () -> Optional[int]
        """Status of the owned result, or None if nothing is owned."""
        if self.__result is None:
            return None
        return self.__result.status

    def __bool__(self):
        # type: () -> bool
        return self.__result is not None

    def detach(self):
        # type: () -> Optional[session.NativeResult]
        """Give up ownership of the result and return it."""
        result = self.__result
        self.__result = None
        return result

    def release(self):
        # type: () -> None
        """Clear the owned result.  Releasing an empty handle does nothing."""
        result = self.detach()
        if result is not None:
            _log.debug("Releasing result %r", result)
            result.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
