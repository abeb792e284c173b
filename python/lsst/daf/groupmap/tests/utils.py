# This file is part of daf_groupmap.
#
# Developed for the LSST Data Management System.
# This product includes software developed by the LSST Project
# (http://www.lsst.org).
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# This software is dual licensed under the GNU General Public License and also
# under a 3-clause BSD license. Recipients may choose which of these licenses
# to use; please see the files gpl-3.0.txt and/or bsd_license.txt,
# respectively.  If you choose the GPL option then the following text applies
# (but note that there is still no warranty even if you opt for BSD instead):
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from __future__ import annotations

__all__ = ("GroupedCollectionTestMixin",)

from typing import TYPE_CHECKING, Any, ClassVar

from .._grouped import GroupedCollection

if TYPE_CHECKING:
    import unittest

    class TestCaseMixin(unittest.TestCase):
        """Base class for mixin test classes that use TestCase methods."""

        pass

else:

    class TestCaseMixin:
        """Do-nothing definition of mixin base class for regular execution."""

        pass


class GroupedCollectionTestMixin(TestCaseMixin):
    """Tests for the behavior shared by all `GroupedCollection` subclasses.

    Concrete test cases must also inherit from `unittest.TestCase`, set
    `container_type`, and implement `write`.
    """

    container_type: ClassVar[type[GroupedCollection]]
    """The `GroupedCollection` subclass being tested."""

    def write(self, container: Any, group: Any, *items: Any) -> Any:
        """Add items to a group through the container's usual write operation
        and return whatever that operation returns.

        ``items`` are keys for keyed containers and values otherwise.
        """
        raise NotImplementedError()

    def test_group_existence(self) -> None:
        c = self.container_type()
        self.assertFalse(c.has("g"))
        self.assertNotIn("g", c)
        self.assertEqual(len(c), 0)
        self.assertFalse(c)
        self.write(c, "g", "a", "b")
        self.assertTrue(c.has("g"))
        self.assertIn("g", c)
        self.assertEqual(len(c), 1)
        self.assertEqual(c.size_of("g"), 2)
        self.assertEqual(list(c.groups()), ["g"])
        c.delete("g", "a")
        self.assertTrue(c.has("g"))
        c.delete("g", "b")
        self.assertFalse(c.has("g"))
        self.assertEqual(len(c), 0)
        self.assertEqual(c.size_of("g"), 0)
        self.assertEqual(len(c.flush("g")), 0)

    def test_membership(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a", "b")
        self.assertTrue(c.has_sub("g", "a"))
        self.assertFalse(c.has_sub("g", "z"))
        self.assertFalse(c.has_sub("missing", "a"))
        self.assertTrue(c.has_all("g", "a", "b"))
        self.assertTrue(c.has_all("g"))
        self.assertFalse(c.has_all("g", "a", "z"))
        self.assertFalse(c.has_all("missing"))
        self.assertFalse(c.has_all("missing", "a"))
        self.assertTrue(c.has_any("g", "z", "a"))
        self.assertFalse(c.has_any("g", "z"))
        self.assertFalse(c.has_any("g"))
        self.assertFalse(c.has_any("missing", "a"))
        # Lookups never create groups.
        self.assertEqual(list(c.groups()), ["g"])

    def test_write_is_chainable(self) -> None:
        c = self.container_type()
        self.assertIs(self.write(c, "g", "a"), c)

    def test_flush(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a", "b")
        self.write(c, "h", "c")
        flushed = c.flush("g")
        self.assertEqual(list(flushed), ["a", "b"])
        self.assertFalse(c.has("g"))
        self.assertTrue(c.has("h"))
        self.assertEqual(len(c.flush("g")), 0)
        # The returned collection is no longer owned by the container.
        self.write(c, "g", "x")
        self.assertEqual(list(flushed), ["a", "b"])

    def test_flush_missing(self) -> None:
        c = self.container_type()
        empty = c.flush("missing")
        self.assertEqual(len(empty), 0)
        self.assertIsInstance(empty, type(self.container_type._make_inner()))
        self.assertNotIn("missing", c)

    def test_delete_missing(self) -> None:
        c = self.container_type()
        self.assertEqual(len(c.delete("missing", "a")), 0)
        self.assertNotIn("missing", c)
        self.write(c, "g", "a")
        self.assertEqual(len(c.delete("g", "z")), 0)
        self.assertEqual(len(c.delete("g")), 0)
        self.assertTrue(c.has_sub("g", "a"))

    def test_iterators_of_missing_group(self) -> None:
        c = self.container_type()
        self.assertEqual(list(c.values_of("missing")), [])
        self.assertEqual(list(c.keys_of("missing")), [])
        self.assertNotIn("missing", c)

    def test_iterators_are_independent(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a", "b", "c")
        first = c.keys_of("g")
        second = c.keys_of("g")
        self.assertEqual(next(first), "a")
        self.assertEqual(list(second), ["a", "b", "c"])
        self.assertEqual(list(first), ["b", "c"])

    def test_iterators_are_lazy(self) -> None:
        c = self.container_type()
        keys = c.keys_of("g")
        self.write(c, "g", "a")
        self.assertEqual(list(keys), ["a"])

    def test_full_traversal_order(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a", "b")
        self.write(c, "h", "c")
        self.write(c, "g", "d")
        self.assertEqual([(entry[0], entry[1]) for entry in c], [("g", "a"), ("g", "b"), ("g", "d"), ("h", "c")])

    def test_clear(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a")
        self.write(c, "h", "b")
        with self.assertLogs("lsst.daf.groupmap", level="DEBUG") as cm:
            c.clear()
        self.assertIn("Clearing 2 group(s)", cm.output[0])
        self.assertEqual(len(c), 0)
        self.assertEqual(list(c), [])

    def test_flush_logs(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a")
        with self.assertLogs("lsst.daf.groupmap", level="DEBUG") as cm:
            c.flush("g")
        self.assertIn("Flushed group 'g' with 1 item(s)", cm.output[0])

    def test_copy(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a")
        copied = c.copy()
        self.assertIsInstance(copied, self.container_type)
        self.assertEqual(copied, c)
        self.write(copied, "g", "b")
        self.write(copied, "h", "c")
        self.assertNotEqual(copied, c)
        self.assertFalse(c.has_sub("g", "b"))
        self.assertFalse(c.has("h"))

    def test_equality(self) -> None:
        c1 = self.container_type()
        c2 = self.container_type()
        self.assertEqual(c1, c2)
        self.write(c1, "g", "a")
        self.assertNotEqual(c1, c2)
        self.write(c2, "g", "a")
        self.assertEqual(c1, c2)
        self.assertNotEqual(c1, {"g": c1.flush("g")})

    def test_repr(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a")
        self.assertTrue(repr(c).startswith(f"{self.container_type.__name__}({{'g': "))

    def test_json(self) -> None:
        c = self.container_type()
        self.write(c, "g", "a", "b")
        self.write(c, 2, "c")
        restored = self.container_type.from_json(c.to_json())
        self.assertEqual(restored, c)
        self.assertEqual(list(restored.groups()), ["g", 2])

    def test_from_simple_skips_empty_groups(self) -> None:
        simple = self.container_type._serializedType(groups=[("g", []), ("h", [])])
        with self.assertLogs("lsst.daf.groupmap", level="DEBUG") as cm:
            c = self.container_type.from_simple(simple)
        self.assertIn("Deserialized 0 group(s)", cm.output[0])
        self.assertEqual(len(c), 0)
