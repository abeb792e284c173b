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

__all__ = ("MapSet", "SerializedMapSet")

from collections.abc import Hashable, Iterable, Iterator
from typing import Any, TypeVar

import pydantic

from ._grouped import GroupedCollection
from ._ordered_set import InsertionOrderedSet

_G = TypeVar("_G", bound=Hashable)
_V = TypeVar("_V", bound=Hashable)


class SerializedMapSet(pydantic.BaseModel):
    """Serializable format of `MapSet` object."""

    groups: list[tuple[Any, list[Any]]]
    """``(group, [value, ...])`` pairs, in group order."""


class MapSet(GroupedCollection[_G, InsertionOrderedSet[_V]]):
    """A two-level container where each group holds a set of unique values,
    enabling constant-time membership tests by ``(group, value)``.

    Parameters
    ----------
    groups : `~collections.abc.Mapping`, optional
        Initial contents, mapping group identifier to an iterable of the
        values in that group.

    Notes
    -----
    Each group's values are held in an `InsertionOrderedSet`, so
    `values_of` and full iteration report values in the order they were
    first added.
    """

    __slots__ = ()

    _serializedType = SerializedMapSet

    @classmethod
    def _make_inner(cls) -> InsertionOrderedSet[_V]:
        return InsertionOrderedSet()

    def _load_group(self, group: _G, items: Iterable[Any]) -> None:
        self.add(group, *items)

    def add(self, group: _G, *values: _V) -> MapSet[_G, _V]:
        """Add values to a group, creating the group if needed.

        Values already present are left where they are.  Calling this with no
        values does nothing.

        Returns
        -------
        self : `MapSet`
            This instance, to allow chaining.
        """
        if values:
            inner = self._inner_for_write(group)
            try:
                inner.update(values)
            finally:
                # An unhashable value leaves a newly created group empty.
                self._prune(group, inner)
        return self

    def set(self, group: _G, *values: _V) -> MapSet[_G, _V]:
        """Replace all values in a group.

        Calling this with no values deletes the group.

        Returns
        -------
        self : `MapSet`
            This instance, to allow chaining.
        """
        if values:
            self._groups[group] = InsertionOrderedSet(values)
        else:
            self._groups.pop(group, None)
        return self

    def delete(self, group: _G, *values: _V) -> InsertionOrderedSet[_V]:
        """Remove values from a group.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.
        *values : `~collections.abc.Hashable`
            Values to remove.  Values that are not present are ignored.

        Returns
        -------
        removed : `InsertionOrderedSet`
            The values that were actually removed.

        Notes
        -----
        The group itself is removed if it has no values left.
        """
        removed: InsertionOrderedSet[_V] = InsertionOrderedSet()
        inner = self._groups.get(group)
        if inner is None:
            return removed
        try:
            for value in values:
                if value in inner:
                    inner.remove(value)
                    removed.add(value)
        finally:
            self._prune(group, inner)
        return removed

    def __iter__(self) -> Iterator[tuple[_G, _V]]:
        for group, inner in self._groups.items():
            for value in inner:
                yield group, value
