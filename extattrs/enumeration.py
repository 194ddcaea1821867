"""
extattrs.enumeration
====================

Reading the complete attribute set of a filesystem object.

The store only lists names a page at a time, as many as fit in a transfer
buffer of fixed capacity, and resumes from an opaque cursor.  The capacity is
sized once per call, from the store's maximum value length plus room for one
entry, and the cursor never outlives the call, so concurrent enumerations of
the same path cannot disturb each other.

"""

import extattrs
from extattrs.errors import *

logger = extattrs.getLogger("extattrs.enumeration")


def enumerate_attributes(adapter, path, capacity=None):
    """Return a new dict mapping every attribute name of ``path`` to its value.

    An object without attributes gives an empty dict.  An attribute holding
    an empty value is present with the value ``b""``.  If the same name is
    reported twice, the later value wins.

    :param adapter: A :class:`extattrs.adapter.StoreAdapter`
    :param path: The filesystem object to read
    :param capacity: Transfer buffer capacity, the store's own by default
    :raises `extattrs.errors.StoreIOError`: if listing or fetching fails; no
        partial result is returned

    """
    if capacity is None:
        capacity = adapter.transfer_capacity()
    attrs = {}
    cursor = None
    pages = 0
    more = True
    while more:
        names, cursor, more = adapter.list_page(path, capacity, cursor)
        pages += 1
        logger.debug("%s: page %d holds %d name(s), more=%s", path, pages, len(names), more)
        for name in names:
            try:
                attrs[name] = adapter.get_value(path, name, capacity)
            except AttributeNotFoundError as e:
                raise StoreIOError("enumerate", path=path, name=name,
                                   msg="Attribute '%(name)s' of %(path)s vanished during enumeration",
                                   details=e) from e
    logger.debug("%s: enumerated %d attribute(s) in %d page(s)", path, len(attrs), pages)
    return attrs
