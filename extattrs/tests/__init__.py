#!/usr/bin/env python
"""

  extattrs.tests:  testcases for the extattrs module

"""

#  Send any output from the logging module to stdout, so it will
#  be captured by the test runner and reported appropriately
import sys
import logging
logging.basicConfig(level=logging.ERROR, stream=sys.stdout)

import os
import errno
import shutil
import tempfile

from extattrs.base import *
from extattrs.errors import *
from extattrs.attributes import ExtendedAttributes


def make_temp_dir():
    return tempfile.mkdtemp(prefix="extattrs-test-")


def native_xattrs_supported(path):
    """Check whether user extended attributes can be written on path."""
    import xattr
    from extattrs.osstore import OSXAttrStore
    name = OSXAttrStore()._encode_name("extattrs-probe")
    try:
        xattr.setxattr(path, name, b"1")
        xattr.removexattr(path, name)
    except (OSError, IOError):
        return False
    return True


class XAttrStoreTestCases(object):
    """Base suite of testcases for attribute store implementations.

    To apply the tests to your own store, use XAttrStoreTestCases as a mixin
    for a unittest.TestCase subclass whose setUp sets ``self.store`` to the
    store and ``self.path`` to an existing object without attributes, and
    whose ``missing`` attribute names an object that does not exist.

    This class is designed as a mixin so that it's not detected by test
    loading tools.
    """

    def list_all(self, path, capacity=None):
        if capacity is None:
            capacity = self.store.transfer_capacity()
        names = []
        cursor = None
        more = True
        while more:
            page, cursor, more = self.store.listxattrs(path, capacity, cursor)
            names.extend(page)
        return names

    def test_meta(self):
        self.assertTrue(self.store.getmeta("max_value_length") > 0)
        self.assertTrue(self.store.hasmeta("entry_overhead"))
        self.assertFalse(self.store.hasmeta("no-such-meta"))
        self.assertEqual(self.store.getmeta("no-such-meta", 3.14), 3.14)
        self.assertRaises(NoMetaError, self.store.getmeta, "no-such-meta")

    def test_empty_listing(self):
        names, cursor, more = self.store.listxattrs(self.path, self.store.transfer_capacity(), None)
        self.assertEqual(names, [])
        self.assertFalse(more)

    def test_set_get_delete(self):
        codes = self.store.setxattrs(self.path, [("attr1", b"foo"), ("attr2", b"bar")])
        self.assertEqual(codes, [0, 0])
        self.assertEqual(self.store.getxattr(self.path, "attr1", 100), b"foo")
        self.assertEqual(self.store.getxattr(self.path, "attr2", 100), b"bar")
        self.assertEqual(sorted(self.list_all(self.path)), ["attr1", "attr2"])
        self.store.setxattrs(self.path, [("attr1", b"overwritten")])
        self.assertEqual(self.store.getxattr(self.path, "attr1", 100), b"overwritten")
        self.store.delxattr(self.path, "attr1")
        self.assertEqual(self.list_all(self.path), ["attr2"])

    def test_empty_value(self):
        self.store.setxattrs(self.path, [("blank", b"")])
        self.assertEqual(self.store.getxattr(self.path, "blank", 100), b"")
        self.assertEqual(self.list_all(self.path), ["blank"])

    def test_missing_attribute(self):
        with self.assertRaises(OSError) as cm:
            self.store.getxattr(self.path, "nothere", 100)
        self.assertIn(cm.exception.errno, (ENOATTR, errno.ENODATA))
        with self.assertRaises(OSError) as cm:
            self.store.delxattr(self.path, "nothere")
        self.assertIn(cm.exception.errno, (ENOATTR, errno.ENODATA))

    def test_missing_object(self):
        with self.assertRaises(OSError) as cm:
            self.store.listxattrs(self.missing, 1000, None)
        self.assertEqual(cm.exception.errno, errno.ENOENT)
        with self.assertRaises(OSError) as cm:
            self.store.getxattr(self.missing, "attr", 1000)
        self.assertEqual(cm.exception.errno, errno.ENOENT)

    def test_value_larger_than_capacity(self):
        self.store.setxattrs(self.path, [("big", b"0123456789")])
        with self.assertRaises(OSError) as cm:
            self.store.getxattr(self.path, "big", 4)
        self.assertEqual(cm.exception.errno, errno.ERANGE)

    def test_paging(self):
        wanted = ["attribute-%02d" % (i,) for i in range(30)]
        self.store.setxattrs(self.path, [(name, b"v") for name in wanted])
        #  Each name takes 13 bytes, so a page holds three of them
        capacity = 40
        pages = 0
        names = []
        cursor = None
        more = True
        while more:
            page, cursor, more = self.store.listxattrs(self.path, capacity, cursor)
            self.assertTrue(sum(encoded_size(n) for n in page) <= capacity)
            names.extend(page)
            pages += 1
        self.assertEqual(pages, 10)
        self.assertEqual(sorted(names), wanted)

    def test_name_larger_than_capacity(self):
        self.store.setxattrs(self.path, [("a-rather-long-name", b"v")])
        with self.assertRaises(OSError) as cm:
            self.store.listxattrs(self.path, 5, None)
        self.assertEqual(cm.exception.errno, errno.ERANGE)


class ExtendedAttributesTestCases(object):
    """Testcases for ExtendedAttributes running against a particular store.

    The setUp method must set ``self.store`` and ``self.path`` as for
    XAttrStoreTestCases.
    """

    def put(self, **attrs):
        """Write attributes directly to the store, bypassing any cache."""
        entries = [(name, value) for name, value in sorted(attrs.items())]
        self.assertEqual(self.store.setxattrs(self.path, entries), [0] * len(entries))

    def open(self):
        return ExtendedAttributes(self.path, store=self.store)

    def test_construct(self):
        ea = self.open()
        self.assertEqual(ea.path, self.path)
        self.assertTrue(ea.attribute_store is self.store)
        self.assertTrue(ea.persisted)
        self.assertFalse(ea.is_dirty())
        self.assertEqual(dict(ea.attributes), {})
        self.assertEqual(ea.get("attribute"), None)

    def test_reads_existing_attributes(self):
        self.put(attr1=b"foo", attr2=b"bar")
        ea = self.open()
        self.assertEqual(ea["attr1"], b"foo")
        self.assertEqual(ea.fetch("attr2"), b"bar")
        self.assertEqual(len(ea), 2)
        self.assertEqual(dict(ea.original_attributes), {"attr1": b"foo", "attr2": b"bar"})

    def test_round_trip(self):
        ea = self.open()
        ea["one"] = b"1"
        ea["two"] = b"2"
        ea["three"] = b"3"
        ea["nothing"] = b""
        self.assertFalse(ea.persisted)
        result = ea.store()
        self.assertTrue(result.ok)
        self.assertEqual(sorted(result.names()), ["one", "three", "two"])
        self.assertTrue(ea.persisted)
        expected = {"one": b"1", "two": b"2", "three": b"3"}
        self.assertEqual(dict(ea.attributes), expected)
        self.assertEqual(dict(self.open().attributes), expected)

    def test_store_twice(self):
        ea = self.open()
        ea["one"] = b"1"
        self.assertEqual(len(ea.store()), 1)
        self.assertEqual(len(ea.attribute_changes()), 0)
        result = ea.store()
        self.assertEqual(len(result), 0)
        self.assertTrue(result.ok)
        self.assertTrue(ea.persisted)

    def test_store_without_changes_is_clean(self):
        self.put(attr1=b"foo")
        ea = self.open()
        ea["attr1"] = b"other"
        ea["attr1"] = b"foo"
        self.assertTrue(ea.is_dirty())
        self.assertEqual(len(ea.store()), 0)
        self.assertFalse(ea.is_dirty())

    def test_change_and_remove(self):
        self.put(keep=b"k", change=b"old", drop=b"d")
        ea = self.open()
        ea["change"] = b"new"
        del ea["drop"]
        ea["add"] = b"a"
        changes = ea.attribute_changes()
        self.assertEqual(changes.added, {"add": b"a"})
        self.assertEqual(changes.changed, {"change": b"new"})
        self.assertEqual(changes.removed, frozenset(["drop"]))
        result = ea.store()
        self.assertTrue(result.ok)
        self.assertEqual(result.names("remove"), ["drop"])
        self.assertEqual(dict(self.open().attributes),
                         {"keep": b"k", "change": b"new", "add": b"a"})

    def test_set_empty_removes(self):
        self.put(attr1=b"foo")
        ea = self.open()
        ea.set("attr1", b"")
        self.assertFalse("attr1" in ea)
        self.assertTrue(ea.is_dirty())
        ea.store()
        self.assertEqual(dict(self.open().attributes), {})

    def test_remove_already_absent(self):
        self.put(attr1=b"foo")
        ea = self.open()
        del ea["attr1"]
        self.store.delxattr(self.path, "attr1")
        result = ea.store()
        self.assertEqual(len(result), 1)
        self.assertTrue(result.ok)
        self.assertEqual(dict(ea.attributes), {})

    def test_value_too_large(self):
        ea = self.open()
        ea["small"] = b"x"
        too_big = b"x" * (self.store.getmeta("max_value_length") + 1)
        self.assertRaises(ValueTooLargeError, ea.set, "big", too_big)
        self.assertEqual(dict(ea.attributes), {"small": b"x"})

    def test_reset(self):
        self.put(attr1=b"foo")
        ea = self.open()
        ea["attr1"] = b"bar"
        del ea["missing"]
        ea.reset()
        self.assertTrue(ea.persisted)
        self.assertEqual(ea["attr1"], b"foo")

    def test_refresh(self):
        ea = self.open()
        ea["local"] = b"edit"
        self.put(remote=b"change")
        ea.refresh_attributes()
        self.assertTrue(ea.persisted)
        self.assertEqual(dict(ea.attributes), {"remote": b"change"})
        self.assertEqual(ea.get("local"), None)


class TempDirMixin(object):
    """Provide ``self.temp_dir`` with a file and directory to attach attributes to."""

    def setUp(self):
        self.temp_dir = make_temp_dir()
        self.addCleanup(shutil.rmtree, self.temp_dir)
        self.path = os.path.join(self.temp_dir, "attributes")
        with open(self.path, "wb") as f:
            f.write(b"content")
        self.missing = os.path.join(self.temp_dir, "i_do_not_exist")
