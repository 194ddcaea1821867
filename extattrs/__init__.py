"""

  extattrs:  a cached, editable view of a file's extended attributes.

This module provides the class 'ExtendedAttributes', which reads the complete
extended-attribute set of one filesystem object into memory, lets it be edited
like a dictionary, and writes the edits back with a batched commit:

    >>> from extattrs import ExtendedAttributes
    >>> ea = ExtendedAttributes("notes.txt")
    >>> ea["author"] = b"will"
    >>> result = ea.store()
    >>> result.ok
    True

The attributes themselves live in a store.  The following stores are provided:

    OSXAttrStore:       native extended attributes, through the 'xattr' module
    MemoryXAttrStore:   attributes held in memory only
    SidecarXAttrStore:  attributes simulated in hidden files beside each object

"""

__version__ = "0.2.0"

_thread_synchronize_default = True
def set_thread_synchronize_default(sync):
    """Sets the default thread synchronisation flag for new stores.

    Stores are made thread-safe through the use of a per-store threading RLock
    object.  Since this can introduce a small overhead it can be disabled with
    this function if the code is single-threaded.

    :param sync: Set whether to use thread synchronisation for new stores

    """
    global _thread_synchronize_default
    _thread_synchronize_default = sync


# Allow clean use of logging throughout the lib
import logging as _logging
_logging.getLogger("extattrs").addHandler(_logging.NullHandler())
def getLogger(name):
    """Get a logger object for use within the extattrs library."""
    assert name.startswith("extattrs.")
    return _logging.getLogger(name)


from extattrs import errors
from extattrs.base import MAX_VALUE_LENGTH, MAX_NAME_LENGTH, ENTRY_OVERHEAD
from extattrs.diff import ChangeSet, diff
from extattrs.commit import CommitResult, CommitEntry
from extattrs.attributes import ExtendedAttributes
from extattrs.memorystore import MemoryXAttrStore
from extattrs.osstore import OSXAttrStore
from extattrs.sidecarstore import SidecarXAttrStore, ensure_xattrs
