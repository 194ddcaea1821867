"""
Defines the Exception classes thrown by extattrs.  Errors signalled by an
attribute store are translated in to one of the following Exceptions.
Exceptions that relate to a path store that path in `self.path`, and those
that relate to a single attribute store its name in `self.name`.

All Exception classes are derived from `XAttrError` which can be used as a
catch-all exception.

"""

__all__ = ['XAttrError',
           'NoMetaError',
           'ValueTooLargeError',
           'AttributeNotFoundError',
           'StoreIOError',
           'ResourceNotFoundError',
           'PermissionDeniedError',
           'StorageSpaceError',
           'UnsupportedError',
           'ValueRangeError',
           'PartialCommitFailure',
           'ENOATTR',
           'error_for_errno',
           'convert_os_errors',
           ]

import sys
import errno
from functools import wraps


#  Linux reports a missing attribute as ENODATA, BSD and OSX as ENOATTR
ENOATTR = getattr(errno, "ENOATTR", errno.ENODATA)
_NOT_FOUND_ERRNOS = set([ENOATTR, errno.ENODATA])


class XAttrError(Exception):
    """Base exception class for the extattrs module."""
    default_message = "Unspecified error"

    def __init__(self, msg=None, details=None):
        if msg is None:
            msg = self.default_message
        self.msg = msg
        self.details = details

    def __str__(self):
        keys = {}
        for k, v in self.__dict__.items():
            if isinstance(v, bytes):
                v = v.decode(sys.getfilesystemencoding(), 'replace')
            keys[k] = v
        return str(self.msg % keys)

    def __reduce__(self):
        return (self.__class__, (), self.__dict__.copy(),)


class NoMetaError(XAttrError):
    """Exception raised when there is no meta value available."""
    default_message = "No meta value named '%(meta_name)s' could be retrieved"

    def __init__(self, meta_name, msg=None):
        self.meta_name = meta_name
        super(NoMetaError, self).__init__(msg)

    def __reduce__(self):
        return (self.__class__, (self.meta_name,), self.__dict__.copy(),)


class ValueTooLargeError(XAttrError):
    """Exception raised when a value exceeds the store's maximum length.

    This is raised locally, before the store is ever asked to hold the value.
    """
    default_message = "Value of attribute '%(name)s' is %(length)s bytes, the maximum is %(max_length)s"

    def __init__(self, name="", length=0, max_length=0, **kwds):
        self.name = name
        self.length = length
        self.max_length = max_length
        super(ValueTooLargeError, self).__init__(**kwds)


class AttributeNotFoundError(XAttrError):
    """Exception raised when a named attribute does not exist."""
    default_message = "Attribute '%(name)s' not found: %(path)s"

    def __init__(self, path="", name="", **kwds):
        self.path = path
        self.name = name
        self.opname = kwds.pop("opname", None)
        super(AttributeNotFoundError, self).__init__(**kwds)


class StoreIOError(XAttrError):
    """Base exception class for failures reported by the attribute store."""
    default_message = "Unable to %(opname)s: store error [%(errno)s - %(details)s]"

    def __init__(self, opname="", path=None, name=None, **kwds):
        self.opname = opname
        self.path = path
        self.name = name
        self.errno = kwds.pop("errno", None)
        if self.errno is None:
            self.errno = getattr(kwds.get("details", None), "errno", None)
        super(StoreIOError, self).__init__(**kwds)


class ResourceNotFoundError(StoreIOError):
    """Exception raised when the target filesystem object does not exist."""
    default_message = "Unable to %(opname)s: resource not found: %(path)s"


class PermissionDeniedError(StoreIOError):
    default_message = "Unable to %(opname)s: permission denied"


class StorageSpaceError(StoreIOError):
    default_message = "Unable to %(opname)s: insufficient storage space"


class UnsupportedError(StoreIOError):
    """Exception raised when the store has no extended attribute support."""
    default_message = "Unable to %(opname)s: extended attributes not supported by this store"


class ValueRangeError(StoreIOError):
    """Exception raised when the store rejects the size of a name or value."""
    default_message = "Unable to %(opname)s: name or value out of range for attribute '%(name)s'"


class PartialCommitFailure(XAttrError):
    """Exception describing the entries of a commit that the store rejected.

    A commit never raises this by itself; it is built on request from a
    CommitResult, so callers can choose to treat failures as fatal.
    """
    default_message = "Unable to commit %(count)s attribute(s) to %(path)s: %(summary)s"

    def __init__(self, path="", failures=(), **kwds):
        self.path = path
        self.failures = list(failures)
        self.count = len(self.failures)
        self.summary = ", ".join("%s %s [%s]" % (op, name, code)
                                 for (name, op, code) in self.failures)
        super(PartialCommitFailure, self).__init__(**kwds)


_ERRNO_CLASSES = {
    errno.ENOENT: ResourceNotFoundError,
    errno.ENOTDIR: ResourceNotFoundError,
    errno.EACCES: PermissionDeniedError,
    errno.EPERM: PermissionDeniedError,
    errno.ENOSPC: StorageSpaceError,
    errno.ENOSYS: UnsupportedError,
    errno.EOPNOTSUPP: UnsupportedError,
    errno.ERANGE: ValueRangeError,
    errno.E2BIG: ValueRangeError,
}
if hasattr(errno, "ENOTSUP"):
    _ERRNO_CLASSES[errno.ENOTSUP] = UnsupportedError
if hasattr(errno, "EDQUOT"):
    _ERRNO_CLASSES[errno.EDQUOT] = StorageSpaceError


def error_for_errno(code, opname="", path=None, name=None, details=None):
    """Build the exception instance matching an errno-style store code.

    :param code: The errno value reported by the store
    :param opname: Name of the store operation that failed
    :param path: The filesystem object the operation addressed
    :param name: The attribute name, if the operation addressed one
    :param details: The original exception, if there was one

    """
    if code in _NOT_FOUND_ERRNOS:
        return AttributeNotFoundError(path, name, opname=opname, details=details)
    cls = _ERRNO_CLASSES.get(code, StoreIOError)
    return cls(opname, path=path, name=name, errno=code, details=details)


def convert_os_errors(func):
    """Function wrapper to convert OSError/IOError instances into XAttrError.

    The ``path`` and ``name`` arguments of the wrapped method, where it has
    them, are recorded on the raised exception.
    """
    opname = func.__name__
    code = func.__code__
    argnames = code.co_varnames[1:code.co_argcount]

    @wraps(func)
    def wrapper(self, *args, **kwds):
        try:
            return func(self, *args, **kwds)
        except (OSError, IOError) as e:
            callargs = dict(zip(argnames, args))
            callargs.update(kwds)
            path = callargs.get("path", getattr(e, "filename", None))
            if not getattr(e, "errno", None):
                raise StoreIOError(opname, path=path, name=callargs.get("name"), details=e) from e
            raise error_for_errno(e.errno, opname, path, callargs.get("name"), details=e) from e
    return wrapper
