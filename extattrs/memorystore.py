#!/usr/bin/env python
"""
extattrs.memorystore
====================

An attribute store that exists in memory only.  Which makes it extremely
fast, but non-permanent.

Objects must be registered with :meth:`MemoryXAttrStore.create` before they can
hold attributes; any other path behaves like a file that does not exist.

"""

import os
import errno

from extattrs.base import *
from extattrs.errors import ENOATTR


class MemoryXAttrStore(XAttrStore):
    """A store that holds attributes in memory, keyed by path."""

    def __init__(self, thread_synchronize=None, max_value_length=MAX_VALUE_LENGTH,
                 max_name_length=MAX_NAME_LENGTH):
        super(MemoryXAttrStore, self).__init__(thread_synchronize=thread_synchronize)
        self._meta['max_value_length'] = max_value_length
        self._meta['max_name_length'] = max_name_length
        self._objects = {}

    def __str__(self):
        return "<MemoryXAttrStore (%d objects)>" % (len(self._objects),)

    __repr__ = __str__

    @synchronize
    def create(self, path, attrs=None):
        """Register a filesystem object, optionally with initial attributes."""
        self._objects[path] = dict(attrs or {})

    @synchronize
    def remove(self, path):
        """Forget a filesystem object and its attributes."""
        self._get_attrs(path)
        del self._objects[path]

    def exists(self, path):
        return path in self._objects

    def _get_attrs(self, path):
        try:
            return self._objects[path]
        except KeyError:
            raise OSError(errno.ENOENT, os.strerror(errno.ENOENT), path)

    @synchronize
    def listxattrs(self, path, capacity, cursor):
        names = list(self._get_attrs(path))
        return self._page(names, capacity, cursor)

    @synchronize
    def getxattr(self, path, name, capacity):
        attrs = self._get_attrs(path)
        try:
            value = attrs[name]
        except KeyError:
            raise OSError(ENOATTR, os.strerror(ENOATTR), path)
        if len(value) > capacity:
            raise OSError(errno.ERANGE, os.strerror(errno.ERANGE), path)
        return value

    @synchronize
    def setxattrs(self, path, entries):
        attrs = self._get_attrs(path)
        max_value_length = self.getmeta('max_value_length')
        max_name_length = self.getmeta('max_name_length')
        codes = []
        for name, value in entries:
            if not name or len(os.fsencode(name)) > max_name_length:
                codes.append(errno.ERANGE)
            elif len(value) > max_value_length:
                codes.append(errno.E2BIG)
            else:
                attrs[name] = bytes(value)
                codes.append(0)
        return codes

    @synchronize
    def delxattr(self, path, name):
        attrs = self._get_attrs(path)
        try:
            del attrs[name]
        except KeyError:
            raise OSError(ENOATTR, os.strerror(ENOATTR), path)
