#!/usr/bin/env python

"""Set up the pgprepared package.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install pgprepared

To install with the libpq session (via psycopg):

    pip install 'pgprepared[pq]'
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'pgprepared', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in pgprepared/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

setup(
    name='pgprepared',
    version=VERSION,
    author='pgprepared developers',
    description='Prepared statement execution engine for PostgreSQL sessions',
    keywords='postgresql prepared statement libpq',
    packages=['pgprepared'],
    license='BSD License',
    long_description=open(readme).read(),
    python_requires='>=3.9',
    install_requires=['tzlocal>=4.0'],
    extras_require=dict(pq='psycopg[binary]>=3.1',
                        test=['pytest>=7.0', 'psycopg[binary]>=3.1']),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: SQL',
        'Topic :: Database :: Front-Ends',
    ],
)
