#!/usr/bin/env python
# -*- coding: utf8 -*-
# vim: ts=4 sw=4 et ai:

import pathlib
from setuptools import setup, find_packages

base = pathlib.Path(__file__).parent

README = (base / 'README.md').read_text()

setup(
      name='tftplite',
      version='0.1.0',
      description='Minimal single-transfer TFTP server',
      long_description=README,
      long_description_content_type='text/markdown',
      packages=find_packages(include=['tftplite', 'tftplite.*']),
      scripts=['examples/tftplite_server.py'],
      python_requires='>=3.6',
      extras_require={
          'test': ['pytest'],
      },
      classifiers=[
        'Programming Language :: Python :: 3.6',
        'Development Status :: 4 - Beta',
        'Environment :: No Input/Output (Daemon)',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Topic :: Internet',
        ]
      )
