"""
extattrs.commit
===============

Applying a ChangeSet to an attribute store.

Added and changed attributes are written with a single set batch.  Removed
attributes are deleted one at a time, and an attribute that is already absent
counts as removed.  A commit is best-effort per entry: a failure is recorded
against its name and the remaining entries are still attempted.  Nothing is
raised for per-entry failures; inspect the returned CommitResult.

"""

import errno

import extattrs
from extattrs.errors import *

logger = extattrs.getLogger("extattrs.commit")

SET = "set"
REMOVE = "remove"


class CommitEntry(object):
    """The outcome of one attempted operation."""

    __slots__ = ('name', 'op', 'errno')

    def __init__(self, name, op, errno=None):
        self.name = name
        self.op = op
        self.errno = errno or None

    def __repr__(self):
        if self.succeeded:
            return "<CommitEntry %s %r ok>" % (self.op, self.name)
        return "<CommitEntry %s %r errno=%s>" % (self.op, self.name, self.errno)

    def __eq__(self, other):
        if not isinstance(other, CommitEntry):
            return NotImplemented
        return (self.name, self.op, self.errno) == (other.name, other.op, other.errno)

    __hash__ = None

    @property
    def succeeded(self):
        return self.errno is None

    def error(self, path=None):
        """The exception describing this entry's failure, or None."""
        if self.succeeded:
            return None
        return error_for_errno(self.errno, self.op, path, self.name)


class CommitResult(object):
    """Per-entry outcomes of a commit, in the order they were attempted."""

    def __init__(self, path=None, entries=None):
        self.path = path
        self.entries = list(entries or [])

    def __repr__(self):
        return "<CommitResult %s: %d ok, %d failed>" % (self.path, len(self.succeeded),
                                                        len(self.failed))

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __bool__(self):
        return bool(self.entries)

    def add(self, name, op, code=None):
        entry = CommitEntry(name, op, code)
        self.entries.append(entry)
        return entry

    @property
    def succeeded(self):
        return [e for e in self.entries if e.succeeded]

    @property
    def failed(self):
        return [e for e in self.entries if not e.succeeded]

    @property
    def ok(self):
        """True if no entry failed (an empty result is ok)."""
        return not self.failed

    @property
    def partial(self):
        """True if some entries failed while others succeeded."""
        return bool(self.failed) and bool(self.succeeded)

    def names(self, op=None):
        """Names of the attempted entries, optionally only those of kind ``op``."""
        return [e.name for e in self.entries if op is None or e.op == op]

    def check(self):
        """Raise PartialCommitFailure if any entry failed."""
        failed = self.failed
        if failed:
            raise PartialCommitFailure(self.path, [(e.name, e.op, e.errno) for e in failed])


def commit(adapter, path, changeset):
    """Apply ``changeset`` to ``path`` through ``adapter``.

    :param adapter: A :class:`extattrs.adapter.StoreAdapter`
    :param path: The filesystem object to modify
    :param changeset: The :class:`extattrs.diff.ChangeSet` to apply
    :rtype: :class:`CommitResult`

    """
    result = CommitResult(path)
    for outcome in adapter.apply_set_batch(path, changeset.set_entries()):
        entry = result.add(outcome.name, SET, outcome.errno)
        if not entry.succeeded:
            logger.warning("%s: failed to set %r [errno %s]", path, entry.name, entry.errno)
    for name in sorted(changeset.removed):
        try:
            if not adapter.remove(path, name):
                logger.debug("%s: %r was already absent", path, name)
        except StoreIOError as e:
            entry = result.add(name, REMOVE, e.errno or errno.EIO)
            logger.warning("%s: failed to remove %r [errno %s]", path, name, entry.errno)
        else:
            result.add(name, REMOVE)
    logger.info("%s: committed %d change(s), %d failed", path, len(result), len(result.failed))
    return result
