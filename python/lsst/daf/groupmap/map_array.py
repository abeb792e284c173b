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

__all__ = ("MapArray", "SerializedMapArray")

from collections.abc import Hashable, Iterable, Iterator
from typing import Any, TypeVar

import pydantic

from ._grouped import GroupedCollection

_G = TypeVar("_G", bound=Hashable)
_V = TypeVar("_V")


class SerializedMapArray(pydantic.BaseModel):
    """Serializable format of `MapArray` object."""

    groups: list[tuple[Any, list[Any]]]
    """``(group, [value, ...])`` pairs, in group order."""


class MapArray(GroupedCollection[_G, list[_V]]):
    """A two-level container where each group holds an ordered `list` of
    values.

    Parameters
    ----------
    groups : `~collections.abc.Mapping`, optional
        Initial contents, mapping group identifier to an iterable of the
        values in that group.

    Notes
    -----
    Values may repeat within a group, and need only support equality
    comparison (not hashing).  Membership tests and `delete` scan the group's
    list, so they are linear in the size of the group; only the group lookup
    is constant-time.
    """

    __slots__ = ()

    _serializedType = SerializedMapArray

    @classmethod
    def _make_inner(cls) -> list[_V]:
        return []

    def _load_group(self, group: _G, items: Iterable[Any]) -> None:
        self.add(group, *items)

    def add(self, group: _G, *values: _V) -> MapArray[_G, _V]:
        """Append values to the end of a group's list, creating the group if
        needed.

        Calling this with no values does nothing.

        Returns
        -------
        self : `MapArray`
            This instance, to allow chaining.
        """
        if values:
            self._inner_for_write(group).extend(values)
        return self

    def set(self, group: _G, *values: _V) -> MapArray[_G, _V]:
        """Replace a group's list with the given values.

        Calling this with no values deletes the group.

        Returns
        -------
        self : `MapArray`
            This instance, to allow chaining.
        """
        if values:
            self._groups[group] = list(values)
        else:
            self._groups.pop(group, None)
        return self

    def delete(self, group: _G, *values: _V) -> list[_V]:
        """Remove every occurrence of the given values from a group.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.
        *values
            Values to remove.  Values that are not present are ignored.

        Returns
        -------
        removed : `list`
            The removed values, repeated once per removed occurrence, in the
            order the values were given.

        Notes
        -----
        The group itself is removed if it has no values left.
        """
        removed: list[_V] = []
        inner = self._groups.get(group)
        if inner is None:
            return removed
        try:
            for value in values:
                if (count := inner.count(value)) == 0:
                    continue
                # Same identity-then-equality test as list.count.
                inner[:] = [item for item in inner if not (item is value or item == value)]
                removed.extend([value] * count)
        finally:
            self._prune(group, inner)
        return removed

    def __iter__(self) -> Iterator[tuple[_G, _V]]:
        for group, inner in self._groups.items():
            for value in inner:
                yield group, value
