"""
extattrs.attributes
===================

The ExtendedAttributes class: a dictionary-like, locally cached view of the
extended attributes of one filesystem object.

Reading and editing only touch the cached copy.  Edits reach the store when
:meth:`ExtendedAttributes.store` is called, which writes the differences from
the last-read state and then reads everything back, so that after a store the
cache shows whatever the store actually accepted.

For example::

    >>> ea = ExtendedAttributes("/tmp/report.pdf")
    >>> ea["checksum"] = b"9f86d081"
    >>> del ea["obsolete"]
    >>> result = ea.store()
    >>> [entry.name for entry in result.failed]
    []

"""

import threading

import extattrs
from extattrs.base import MAX_VALUE_LENGTH, DummyLock, synchronize
from extattrs.adapter import StoreAdapter
from extattrs.osstore import OSXAttrStore
from extattrs.enumeration import enumerate_attributes
from extattrs.snapshot import AttributeSnapshot
from extattrs.diff import diff
from extattrs.commit import CommitResult, commit
from extattrs.errors import StoreIOError

logger = extattrs.getLogger("extattrs.attributes")


def _coerce_value(value):
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


class ExtendedAttributes(object):
    """The extended attributes of one filesystem object.

    The object is read from the store when constructed, so a newly created
    instance is always clean (``persisted`` is True).

    Setting an attribute to an empty value removes it.
    """

    #: The largest value the default store accepts for one attribute
    MAX_VALUE_LENGTH = MAX_VALUE_LENGTH

    def __init__(self, path, store=None, thread_synchronize=False):
        """
        :param path: The filesystem object whose attributes are managed
        :param store: The :class:`extattrs.base.XAttrStore` holding them, an
            :class:`extattrs.osstore.OSXAttrStore` by default
        :param thread_synchronize: If True, every operation on this object is
            serialized with a threading.RLock; otherwise callers sharing it
            between threads must lock around it themselves
        :raises `extattrs.errors.StoreIOError`: if the attributes cannot be read

        """
        if store is None:
            store = OSXAttrStore()
        self._path = path
        self._adapter = StoreAdapter(store)
        if thread_synchronize:
            self._lock = threading.RLock()
        else:
            self._lock = DummyLock()
        self._snapshot = AttributeSnapshot(max_value_length=self._adapter.max_value_length)
        self.refresh()

    def __repr__(self):
        return "<ExtendedAttributes %s (%d attribute(s)%s)>" % (self._path, len(self),
                                                               not self.persisted and ", modified" or "")

    @property
    def path(self):
        return self._path

    @property
    def attribute_store(self):
        """The attribute store this object reads from and writes to."""
        return self._adapter.store

    @property
    def attributes(self):
        """Read-only view of the attributes, including unsaved edits."""
        return self._snapshot.working

    @property
    def original_attributes(self):
        """Read-only view of the attributes as last read from the store."""
        return self._snapshot.baseline

    @property
    @synchronize
    def persisted(self):
        return not self._snapshot.is_dirty()

    @synchronize
    def is_dirty(self):
        return self._snapshot.is_dirty()

    @synchronize
    def get(self, name, default=None):
        return self._snapshot.get(name, default)
    fetch = get

    @synchronize
    def set(self, name, value):
        """Set attribute ``name``; an empty value removes it.

        ``str`` values are encoded as UTF-8.

        :raises `extattrs.errors.ValueTooLargeError`: if the value exceeds the
            store's maximum value length

        """
        self._snapshot.set(name, _coerce_value(value))

    @synchronize
    def delete(self, name):
        """Remove attribute ``name``; removing an absent attribute is not an error."""
        self._snapshot.delete(name)

    def __getitem__(self, name):
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __setitem__(self, name, value):
        self.set(name, value)

    def __delitem__(self, name):
        self.delete(name)

    @synchronize
    def __contains__(self, name):
        return name in self._snapshot.working

    @synchronize
    def __iter__(self):
        return iter(list(self._snapshot.working))

    @synchronize
    def __len__(self):
        return len(self._snapshot.working)

    @synchronize
    def reset(self):
        """Discard unsaved edits."""
        self._snapshot.reset()

    @synchronize
    def attribute_changes(self):
        """The :class:`extattrs.diff.ChangeSet` that :meth:`store` would apply."""
        return diff(self._snapshot.baseline, self._snapshot.working)

    @synchronize
    def refresh(self):
        """Re-read every attribute from the store, discarding unsaved edits.

        If reading fails, the cached attributes are left as they were.

        :raises `extattrs.errors.StoreIOError`: if the attributes cannot be read

        """
        attrs = enumerate_attributes(self._adapter, self._path)
        self._snapshot.install_baseline(attrs)
    refresh_attributes = refresh

    @synchronize
    def store(self):
        """Write unsaved edits to the store, then re-read the attributes.

        Failures of individual attributes do not raise; they are reported in
        the returned result, and the re-read cache reflects what the store
        actually holds.

        :rtype: :class:`extattrs.commit.CommitResult`
        :raises `extattrs.errors.StoreIOError`: if the attributes cannot be
            re-read afterwards.  The exception's ``commit_result`` attribute
            then holds the result of the commit that did take place, and the
            cached attributes are left as they were before the store.

        """
        changes = diff(self._snapshot.baseline, self._snapshot.working)
        if changes:
            result = commit(self._adapter, self._path, changes)
        else:
            logger.debug("%s: no changes to store", self._path)
            result = CommitResult(self._path)
        try:
            self.refresh()
        except StoreIOError as e:
            e.commit_result = result
            raise
        return result
