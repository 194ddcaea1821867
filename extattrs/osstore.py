"""
extattrs.osstore
================

Native extended-attribute support, via the 'xattr' module

Linux divides attribute names into namespaces and only lets unprivileged
processes use the ``user.`` one, so on Linux the flat names used by extattrs
are mapped into that namespace and names outside it are not listed.  Other
platforms have a single flat namespace and names are passed through as-is.

"""

import sys
import errno

import xattr

from extattrs.base import *


if sys.platform.startswith("linux"):
    _default_namespace = "user"
else:
    _default_namespace = None


class OSXAttrStore(XAttrStore):
    """Store attributes on the operating system's own filesystem objects."""

    _meta = dict(XAttrStore._meta, native=True)

    def __init__(self, namespace=_default_namespace, symlink=False, thread_synchronize=None):
        """
        Creates a store backed by the operating system's extended attributes

        :param namespace: Prefix mapped onto every attribute name, or None for no mapping
        :param symlink: If True, operate on symbolic links themselves rather than their targets
        :param thread_synchronize: If True, this object will be thread-safe by use of a threading.RLock object

        """
        super(OSXAttrStore, self).__init__(thread_synchronize=thread_synchronize)
        self.namespace = namespace
        self.symlink = symlink
        if namespace:
            self._prefix = namespace + "."
        else:
            self._prefix = ""

    def __str__(self):
        return "<OSXAttrStore namespace=%r>" % (self.namespace,)

    __repr__ = __str__

    def _encode_name(self, name):
        return self._prefix + name

    def _decode_name(self, name):
        return name[len(self._prefix):]

    def _in_namespace(self, name):
        return name.startswith(self._prefix)

    @synchronize
    def listxattrs(self, path, capacity, cursor):
        names = [self._decode_name(n)
                 for n in xattr.listxattr(path, symlink=self.symlink)
                 if self._in_namespace(n)]
        return self._page(names, capacity, cursor)

    @synchronize
    def getxattr(self, path, name, capacity):
        value = xattr.getxattr(path, self._encode_name(name), symlink=self.symlink)
        if len(value) > capacity:
            raise OSError(errno.ERANGE, "Attribute value does not fit in the transfer buffer", path)
        return value

    @synchronize
    def setxattrs(self, path, entries):
        codes = []
        for name, value in entries:
            try:
                xattr.setxattr(path, self._encode_name(name), value, symlink=self.symlink)
            except (OSError, IOError) as e:
                if not e.errno or e.errno == errno.ENOENT:
                    raise
                codes.append(e.errno)
            else:
                codes.append(0)
        return codes

    @synchronize
    def delxattr(self, path, name):
        xattr.removexattr(path, self._encode_name(name), symlink=self.symlink)
