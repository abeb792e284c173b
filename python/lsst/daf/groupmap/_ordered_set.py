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

__all__ = ("InsertionOrderedSet",)

from collections.abc import Hashable, Iterable, Iterator, MutableSet
from typing import Any, TypeVar

_T = TypeVar("_T", bound=Hashable)


class InsertionOrderedSet(MutableSet[_T]):
    """A mutable set that iterates in insertion order.

    Parameters
    ----------
    elements : `~collections.abc.Iterable`, optional
        Elements to include in the set.  Duplicates are collapsed, keeping the
        position of the first occurrence.

    Notes
    -----
    Elements are stored as the keys of a `dict`, so membership tests,
    insertion and removal have the same cost as for a builtin `set`, while
    iteration order follows the usual `dict` ordering guarantees.  Sets with
    the same elements compare as equal even if their iteration order is not
    the same, and instances also compare equal to builtin `set` and
    `frozenset` objects.
    """

    __slots__ = ("_mapping",)

    def __init__(self, elements: Iterable[_T] = ()):
        self._mapping: dict[_T, None] = dict.fromkeys(elements)

    @classmethod
    def _from_iterable(cls, iterable: Iterable[_T]) -> InsertionOrderedSet[_T]:
        """Construct class from an iterable.

        Hook to ensure that inherited `collections.abc.Set` operators return
        `InsertionOrderedSet` instances (see `collections.abc` documentation
        for more information).
        """
        return InsertionOrderedSet(iterable)

    def __contains__(self, element: Any) -> bool:
        return element in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[_T]:
        return iter(self._mapping)

    def __repr__(self) -> str:
        return "InsertionOrderedSet({{{}}})".format(", ".join(repr(element) for element in self))

    def add(self, element: _T) -> None:
        """Add an element to the set, leaving its position unchanged if it is
        already present.
        """
        self._mapping[element] = None

    def discard(self, element: _T) -> None:
        # Docstring inherited.
        self._mapping.pop(element, None)

    def remove(self, element: _T) -> None:
        """Remove an element from the set.

        Parameters
        ----------
        element : `object`
            Element to remove.

        Raises
        ------
        KeyError
            Raised if the element is not present.
        """
        del self._mapping[element]

    def pop(self) -> _T:
        """Remove and return the oldest element of the set.

        Raises
        ------
        KeyError
            Raised if the set is empty.
        """
        # Follow MutableSet and choose the first element from iteration.
        it = iter(self._mapping)
        try:
            element = next(it)
        except StopIteration:
            raise KeyError("pop from an empty set") from None
        del self._mapping[element]
        return element

    def clear(self) -> None:
        # Docstring inherited.
        self._mapping.clear()

    def update(self, elements: Iterable[_T]) -> None:
        """Add multiple new elements to the set.

        Parameters
        ----------
        elements : `~collections.abc.Iterable`
            Elements to add.
        """
        for element in elements:
            self._mapping[element] = None

    def copy(self) -> InsertionOrderedSet[_T]:
        """Return a new `InsertionOrderedSet` with the same elements."""
        result = InsertionOrderedSet.__new__(InsertionOrderedSet)
        result._mapping = dict(self._mapping)
        return result
