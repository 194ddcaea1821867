"""
extattrs.snapshot
=================

The two-generation attribute model: a ``baseline`` map holding the attributes
as last read from the store, and a ``working`` map holding them with any local
edits applied.  Both maps are replaced wholesale, never updated in place, when
a new baseline is installed or the working map is reset.

"""

from types import MappingProxyType

from extattrs.base import MAX_VALUE_LENGTH
from extattrs.errors import ValueTooLargeError


class AttributeSnapshot(object):
    """Baseline and working attribute maps, plus a dirty flag.

    The dirty flag is sticky: once an edit is made it stays set until the
    next :meth:`reset`, even if later edits restore the original values.
    """

    def __init__(self, baseline=None, max_value_length=MAX_VALUE_LENGTH):
        self.max_value_length = max_value_length
        self._baseline = dict(baseline or {})
        self._working = dict(self._baseline)
        self._dirty = False

    def __repr__(self):
        return "<AttributeSnapshot %d attribute(s)%s>" % (len(self._working),
                                                          self._dirty and " dirty" or "")

    @property
    def baseline(self):
        """Read-only view of the attributes last read from the store."""
        return MappingProxyType(self._baseline)

    @property
    def working(self):
        """Read-only view of the attributes including local edits."""
        return MappingProxyType(self._working)

    def get(self, name, default=None):
        return self._working.get(name, default)

    def set(self, name, value):
        """Set attribute ``name`` to ``value`` in the working map.

        An empty value deletes the attribute.

        :raises `extattrs.errors.ValueTooLargeError`: if the value is longer
            than ``max_value_length``; the working map is left unchanged
        :raises TypeError: if ``name`` is not a str or ``value`` is not bytes

        """
        if not isinstance(name, str):
            raise TypeError("attribute names must be str, not %s" % (type(name).__name__,))
        if not isinstance(value, bytes):
            raise TypeError("attribute values must be bytes, not %s" % (type(value).__name__,))
        if len(value) > self.max_value_length:
            raise ValueTooLargeError(name, len(value), self.max_value_length)
        if not value:
            self.delete(name)
            return
        self._dirty = True
        self._working[name] = value

    def delete(self, name):
        """Remove attribute ``name`` from the working map, if it is there."""
        self._dirty = True
        self._working.pop(name, None)

    def reset(self):
        """Discard local edits."""
        self._working = dict(self._baseline)
        self._dirty = False

    def install_baseline(self, attrs):
        """Adopt ``attrs`` as the new baseline and discard local edits."""
        self._baseline = dict(attrs)
        self.reset()

    def is_dirty(self):
        return self._dirty
