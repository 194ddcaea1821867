"""
extattrs.diff
=============

Comparing a working attribute map against its baseline.

"""


class ChangeSet(object):
    """The difference between a baseline and a working attribute map.

    ``added`` and ``changed`` map names to their new values, ``removed`` is
    the set of names to delete.  The three never share a name.
    """

    def __init__(self, added=None, changed=None, removed=None):
        self.added = dict(added or {})
        self.changed = dict(changed or {})
        self.removed = frozenset(removed or ())

    def __repr__(self):
        return "<ChangeSet added=%r changed=%r removed=%r>" % (sorted(self.added),
                                                               sorted(self.changed),
                                                               sorted(self.removed))

    def __len__(self):
        return len(self.added) + len(self.changed) + len(self.removed)

    def __bool__(self):
        return len(self) > 0

    def __eq__(self, other):
        if not isinstance(other, ChangeSet):
            return NotImplemented
        return (self.added == other.added and
                self.changed == other.changed and
                self.removed == other.removed)

    def set_entries(self):
        """List of ``(name, value)`` pairs to set, added before changed."""
        return list(self.added.items()) + list(self.changed.items())


def diff(baseline, working):
    """Compute the ChangeSet turning ``baseline`` into ``working``.

    Values are compared byte for byte.  Neither map is modified.
    """
    added = {}
    changed = {}
    for name, value in working.items():
        if name not in baseline:
            added[name] = value
        elif baseline[name] != value:
            changed[name] = value
    removed = [name for name in baseline if name not in working]
    return ChangeSet(added, changed, removed)
