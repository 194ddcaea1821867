#!/usr/bin/env python

from setuptools import setup

VERSION = "0.2.0"

classifiers = [
    "Development Status :: 4 - Beta",
    'Intended Audience :: Developers',
    'License :: OSI Approved :: BSD License',
    'Operating System :: POSIX',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Topic :: System :: Filesystems',
]

with open('README.txt', 'r') as f:
    long_desc = f.read()


setup(install_requires=['xattr'],
      extras_require={'test': ['pytest']},
      name='extattrs',
      version=VERSION,
      description="Cached, editable extended attributes with batched commits",
      long_description=long_desc,
      license="BSD",
      platforms=['posix'],
      python_requires='>=3.6',
      packages=['extattrs',
                'extattrs.tests'],
      classifiers=classifiers,
      )
