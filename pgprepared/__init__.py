"""A prepared-statement execution engine for PostgreSQL sessions.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__version__ = '1.0.0'

from .datatype import *     # pylint: disable=wildcard-import
from .exception import *    # pylint: disable=wildcard-import, redefined-builtin
from .placeholder import *  # pylint: disable=wildcard-import
from .statement import *    # pylint: disable=wildcard-import
from .session import *      # pylint: disable=wildcard-import
from .executor import *     # pylint: disable=wildcard-import
