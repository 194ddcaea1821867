"""
extattrs.sidecarstore
=====================

Simulated extended attributes for filesystems without native support

For each file, this store maintains a corresponding '.xattrs.FILENAME' file
beside it containing its extended attributes.  Extended attributes of a
directory are stored in the file '.xattrs' within the directory itself.

If extended attributes are required by code that cannot know in advance
whether the filesystem supports them, it should use the function
'ensure_xattrs'.  This will try a native store against the path and return
a sidecar store if it is not supported there.  The sidecar files themselves
cannot hold attributes.

"""

import os
import errno
import pickle

from extattrs.base import *
from extattrs.errors import ENOATTR
from extattrs.osstore import OSXAttrStore


_UNSUPPORTED_ERRNOS = set([errno.ENOSYS, errno.EOPNOTSUPP, getattr(errno, "ENOTSUP", errno.EOPNOTSUPP)])

_CHECK_NAME = "extattrs-check"


def ensure_xattrs(path, store=None):
    """Ensure that attributes can be stored for the given path, simulating them if required.

    Given a store, this function returns a store that supports extended
    attributes for ``path``.  This may be the original store if they are
    supported there, or a SidecarXAttrStore if they must be simulated.

    Support is established by listing the attributes of ``path`` and then
    writing and removing a scratch attribute, since some filesystems list
    attributes but refuse to store them.

    :param path: A filesystem object that must have xattrs
    :param store: The store to try first, an OSXAttrStore by default
    """
    if store is None:
        store = OSXAttrStore()
    try:
        store.listxattrs(path, store.transfer_capacity(), None)
        code, = store.setxattrs(path, [(_CHECK_NAME, b"1")])
        if code:
            raise OSError(code, os.strerror(code), path)
        store.delxattr(path, _CHECK_NAME)
        return store
    except OSError as e:
        if e.errno not in _UNSUPPORTED_ERRNOS:
            raise
        return SidecarXAttrStore(thread_synchronize=store.thread_synchronize)



class SidecarXAttrStore(XAttrStore):
    """Store that simulates xattr support with hidden sidecar files.

    Attributes are kept as a pickled dictionary.  The sidecar file is removed
    again once its object has no attributes left.
    """

    def __init__(self, thread_synchronize=None, max_value_length=MAX_VALUE_LENGTH,
                 max_name_length=MAX_NAME_LENGTH):
        super(SidecarXAttrStore, self).__init__(thread_synchronize=thread_synchronize)
        self._meta['max_value_length'] = max_value_length
        self._meta['max_name_length'] = max_name_length

    def _get_attr_path(self, path):
        """Get the path of the file containing xattrs for the given path."""
        if os.path.isdir(path):
            return os.path.join(path, '.xattrs')
        dir_path, file_name = os.path.split(path)
        return os.path.join(dir_path, '.xattrs.' + file_name)

    def is_attr_path(self, path):
        """Check whether the given path references an xattrs file."""
        return os.path.basename(path).startswith(".xattrs")

    def _get_attr_dict(self, path):
        """Retrieve the xattr dictionary for the given path."""
        if self.is_attr_path(path):
            raise OSError(errno.EINVAL, "sidecar files cannot hold attributes", path)
        if not os.path.lexists(path):
            raise OSError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        attr_path = self._get_attr_path(path)
        try:
            with open(attr_path, 'rb') as f:
                return pickle.load(f)
        except FileNotFoundError:
            return {}
        except EOFError:
            return {}

    def _set_attr_dict(self, path, attrs):
        """Store the xattr dictionary for the given path."""
        attr_path = self._get_attr_path(path)
        if not attrs:
            try:
                os.remove(attr_path)
            except FileNotFoundError:
                pass
            return
        with open(attr_path, 'wb') as f:
            pickle.dump(attrs, f)

    @synchronize
    def listxattrs(self, path, capacity, cursor):
        names = sorted(self._get_attr_dict(path))
        return self._page(names, capacity, cursor)

    @synchronize
    def getxattr(self, path, name, capacity):
        attrs = self._get_attr_dict(path)
        try:
            value = attrs[name]
        except KeyError:
            raise OSError(ENOATTR, os.strerror(ENOATTR), path)
        if len(value) > capacity:
            raise OSError(errno.ERANGE, os.strerror(errno.ERANGE), path)
        return value

    @synchronize
    def setxattrs(self, path, entries):
        attrs = self._get_attr_dict(path)
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
        if any(code == 0 for code in codes):
            self._set_attr_dict(path, attrs)
        return codes

    @synchronize
    def delxattr(self, path, name):
        attrs = self._get_attr_dict(path)
        try:
            del attrs[name]
        except KeyError:
            raise OSError(ENOATTR, os.strerror(ENOATTR), path)
        self._set_attr_dict(path, attrs)
