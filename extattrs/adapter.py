"""
extattrs.adapter
================

The StoreAdapter wraps the primitives of an :class:`extattrs.base.XAttrStore`
and translates the errors they signal into :mod:`extattrs.errors`.  It holds no
state beyond the store it wraps.

"""

import errno

from extattrs.errors import *


class SetOutcome(object):
    """Outcome of one entry of a set batch: the name and an errno (0 for success)."""

    __slots__ = ('name', 'errno')

    def __init__(self, name, errno=0):
        self.name = name
        self.errno = errno

    @property
    def succeeded(self):
        return not self.errno

    def __repr__(self):
        return "<SetOutcome %r errno=%s>" % (self.name, self.errno)


class StoreAdapter(object):
    """Uniform, error-normalizing access to an attribute store."""

    def __init__(self, store):
        self.store = store

    def __repr__(self):
        return "<StoreAdapter %r>" % (self.store,)

    @property
    def max_value_length(self):
        return self.store.getmeta('max_value_length')

    def transfer_capacity(self):
        return self.store.transfer_capacity()

    @convert_os_errors
    def list_page(self, path, capacity, cursor):
        """Fetch one page of names, returning ``(names, cursor, more)``."""
        names, cursor, more = self.store.listxattrs(path, capacity, cursor)
        return list(names), cursor, more

    def list_names(self, path, capacity=None):
        """Iterate over every attribute name of ``path``.

        The listing cursor is private to the returned iterator; to start
        again, call this method again.
        """
        if capacity is None:
            capacity = self.transfer_capacity()
        cursor = None
        more = True
        while more:
            names, cursor, more = self.list_page(path, capacity, cursor)
            for name in names:
                yield name

    @convert_os_errors
    def get_value(self, path, name, capacity=None):
        """Return the value of attribute ``name``.

        :raises `extattrs.errors.AttributeNotFoundError`: if there is no such attribute
        :raises `extattrs.errors.StoreIOError`: for any other store error

        """
        if capacity is None:
            capacity = self.transfer_capacity()
        return bytes(self.store.getxattr(path, name, capacity))

    def apply_set_batch(self, path, entries):
        """Set an ordered sequence of ``(name, value)`` pairs.

        Returns one :class:`SetOutcome` per entry, in order.  A failure of the
        whole batch call is reported as that failure on every entry.
        """
        entries = list(entries)
        if not entries:
            return []
        try:
            codes = self.store.setxattrs(path, entries)
        except (OSError, IOError) as e:
            code = getattr(e, "errno", None) or errno.EIO
            codes = [code] * len(entries)
        return [SetOutcome(name, code) for (name, _value), code in zip(entries, codes)]

    def remove(self, path, name):
        """Remove attribute ``name``.

        Returns True if the attribute was removed, False if it was already
        absent.

        :raises `extattrs.errors.StoreIOError`: for any other store error

        """
        try:
            self.delete(path, name)
        except AttributeNotFoundError:
            return False
        return True

    @convert_os_errors
    def delete(self, path, name):
        """Remove attribute ``name``, raising AttributeNotFoundError if it is absent."""
        self.store.delxattr(path, name)
