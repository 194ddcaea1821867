"""
extattrs.base
=============

This module defines the most basic attribute-store abstraction, the XAttrStore
class.  Instances of XAttrStore hold the extended attributes of filesystem
objects, addressed by path, and offer the primitive operations the rest of
the library is built on.  To implement a new kind of store, start by
subclassing XAttrStore.

Store primitives signal failure the way the operating system does, by raising
OSError with an errno; translating these into :mod:`extattrs.errors` is the
job of :class:`extattrs.adapter.StoreAdapter`.

"""

__all__ = ['MAX_VALUE_LENGTH',
           'MAX_NAME_LENGTH',
           'ENTRY_OVERHEAD',
           'DummyLock',
           'NoDefaultMeta',
           'synchronize',
           'encoded_size',
           'XAttrStore']

import os
import errno
import threading
from functools import wraps

from extattrs.errors import NoMetaError


#  Largest value a single attribute may hold (XATTR_SIZE_MAX on Linux)
MAX_VALUE_LENGTH = 65536

#  Largest attribute name, in encoded bytes (XATTR_NAME_MAX on Linux)
MAX_NAME_LENGTH = 255

#  Room reserved in a transfer buffer for one name and its terminator
ENTRY_OVERHEAD = MAX_NAME_LENGTH + 1


class DummyLock(object):
    """A dummy lock object that doesn't do anything.

    This is used as a placeholder when locking is disabled.
    """

    def acquire(self, blocking=1):
        """Acquiring a DummyLock always succeeds."""
        return 1

    def release(self):
        """Releasing a DummyLock always succeeds."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        pass


class NoDefaultMeta(object):
    """A singleton used to signify that there is no default for getmeta"""
    pass


def synchronize(func):
    """Decorator to synchronize a method on self._lock."""
    @wraps(func)
    def acquire_lock(self, *args, **kwargs):
        self._lock.acquire()
        try:
            return func(self, *args, **kwargs)
        finally:
            self._lock.release()
    return acquire_lock


def encoded_size(name):
    """Number of bytes an attribute name occupies in a listing buffer."""
    return len(os.fsencode(name)) + 1


def _unsupported(opname, path):
    return OSError(errno.ENOTSUP, "%s not supported by this store" % (opname,), path)


class XAttrStore(object):
    """The base class for attribute stores.

    Subclasses must provide the four primitives below.  Every primitive
    raises ``OSError(ENOENT)`` if ``path`` does not name an existing object.

      * ``listxattrs(path, capacity, cursor)`` Return one page of names
      * ``getxattr(path, name, capacity)`` Return the value of one attribute
      * ``setxattrs(path, entries)`` Set several attributes, one code per entry
      * ``delxattr(path, name)`` Remove one attribute

    """

    _meta = {'thread_safe': False,
             'native': False,
             'max_value_length': MAX_VALUE_LENGTH,
             'max_name_length': MAX_NAME_LENGTH,
             'entry_overhead': ENTRY_OVERHEAD}

    def __init__(self, thread_synchronize=None):
        """The base class for attribute stores.

        :param thread_synchronize: If True, a lock object will be created for the object, otherwise a dummy lock will be used.
            If None, the package default is used (see :func:`extattrs.set_thread_synchronize_default`).
        :type thread_synchronize: bool

        """
        super(XAttrStore, self).__init__()
        if thread_synchronize is None:
            import extattrs
            thread_synchronize = extattrs._thread_synchronize_default
        self.thread_synchronize = thread_synchronize
        if thread_synchronize:
            self._lock = threading.RLock()
        else:
            self._lock = DummyLock()
        self._meta = dict(self._meta)
        self._meta['thread_safe'] = bool(thread_synchronize)

    def __repr__(self):
        return "<%s>" % (self.__class__.__name__,)

    def getmeta(self, meta_name, default=NoDefaultMeta):
        """Retrieve a meta value associated with a store.

        The following meta values are always present:

         * *max_value_length* The largest value, in bytes, a single attribute may hold
         * *max_name_length* The largest attribute name, in encoded bytes
         * *entry_overhead* Bytes reserved per entry in a listing buffer
         * *thread_safe* True if the store serializes its own primitives
         * *native* True if attributes are stored by the operating system

        :param meta_name: The name of the meta value to retrieve
        :param default: An option default to return, if the meta value isn't present
        :raises `extattrs.errors.NoMetaError`: If specified meta value is not present, and there is no default

        """
        if meta_name not in self._meta:
            if default is not NoDefaultMeta:
                return default
            raise NoMetaError(meta_name=meta_name)
        return self._meta[meta_name]

    def hasmeta(self, meta_name):
        """Check that a meta value is supported

        :param meta_name: name of a meta value to check
        :rtype: bool

        """
        try:
            self.getmeta(meta_name)
        except NoMetaError:
            return False
        return True

    def transfer_capacity(self):
        """Size of the transfer buffer used for listing and fetching."""
        return self.getmeta('max_value_length') + self.getmeta('entry_overhead')

    def _page(self, names, capacity, cursor):
        """Cut one page from a complete list of names.

        The cursor is the index of the first name not yet returned.  Returns
        the names that fit in ``capacity`` bytes, the advanced cursor, and
        whether any names remain.
        """
        start = cursor or 0
        page = []
        used = 0
        index = start
        while index < len(names):
            size = encoded_size(names[index])
            if used + size > capacity:
                if not page:
                    raise OSError(errno.ERANGE, "Attribute name does not fit in the transfer buffer")
                break
            page.append(names[index])
            used += size
            index += 1
        return page, index, index < len(names)

    def listxattrs(self, path, capacity, cursor):
        """Return one page of attribute names for the given path.

        :param path: The filesystem object
        :param capacity: Size in bytes of the transfer buffer
        :param cursor: None to start a listing, otherwise the cursor returned by the previous page
        :returns: A tuple ``(names, cursor, more)``

        """
        raise _unsupported("list attributes", path)

    def getxattr(self, path, name, capacity):
        """Return the value of the named attribute.

        :raises OSError: ENOATTR if the attribute does not exist, ERANGE if
            the value does not fit in ``capacity`` bytes

        """
        raise _unsupported("get attribute", path)

    def setxattrs(self, path, entries):
        """Set a sequence of ``(name, value)`` pairs, in order.

        :returns: A list holding one errno-style code per entry, 0 for success

        """
        raise _unsupported("set attributes", path)

    def delxattr(self, path, name):
        """Remove the named attribute.

        :raises OSError: ENOATTR if the attribute does not exist

        """
        raise _unsupported("remove attribute", path)
