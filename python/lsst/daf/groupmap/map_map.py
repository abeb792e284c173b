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

__all__ = ("MapMap", "SerializedMapMap")

from collections.abc import Hashable, Iterable, Iterator
from typing import Any, TypeVar, overload

import pydantic

from ._grouped import GroupedCollection

_G = TypeVar("_G", bound=Hashable)
_K = TypeVar("_K", bound=Hashable)
_V = TypeVar("_V")
_T = TypeVar("_T")


class SerializedMapMap(pydantic.BaseModel):
    """Serializable format of `MapMap` object."""

    groups: list[tuple[Any, list[tuple[Any, Any]]]]
    """``(group, [(key, value), ...])`` pairs, in group order."""


class MapMap(GroupedCollection[_G, dict[_K, _V]]):
    """A two-level mapping (group → key → value).

    Suitable for organizing items into named groups while keeping
    constant-time lookup with a pair of keys::

        m = MapMap()
        m.set("users", 1, {"name": "Alice"}).set("users", 2, {"name": "Bob"})
        m.set("orders", "A42", {"total": 99})

        for group, key, value in m:
            print(group, key, value)

    Parameters
    ----------
    groups : `~collections.abc.Mapping`, optional
        Initial contents, mapping group identifier to a mapping (or iterable
        of ``(key, value)`` pairs) of the items in that group.
    """

    __slots__ = ()

    _serializedType = SerializedMapMap

    @classmethod
    def _make_inner(cls) -> dict[_K, _V]:
        return {}

    def _load_group(self, group: _G, items: Iterable[Any]) -> None:
        for key, value in dict(items).items():
            self.set(group, key, value)

    @staticmethod
    def _simplify_inner(inner: dict[_K, _V]) -> list[Any]:
        return list(inner.items())

    @overload
    def get(self, group: _G, key: _K) -> _V | None: ...

    @overload
    def get(self, group: _G, key: _K, default: _T) -> _V | _T: ...

    def get(self, group: _G, key: _K, default: Any = None) -> Any:
        """Return the value stored at ``group`` / ``key``, or ``default`` if
        there is none.
        """
        inner = self._groups.get(group)
        if inner is None:
            return default
        return inner.get(key, default)

    def get_all(self, group: _G) -> dict[_K, _V] | None:
        """Return the inner mapping for a group.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.

        Returns
        -------
        inner : `dict` or `None`
            The group's items, or `None` if the group does not exist.

        Notes
        -----
        The returned `dict` is the container's own storage, not a copy.
        Modifying it modifies ``self``.  A group emptied by hand is reported
        as absent by `has` and ``in``, but its identifier stays in `groups`
        (and counts towards ``len``) until it is written to, deleted from or
        flushed.
        """
        return self._groups.get(group)

    def set(self, group: _G, key: _K, value: _V) -> MapMap[_G, _K, _V]:
        """Store a value at ``group`` / ``key``, creating the group if needed.

        Returns
        -------
        self : `MapMap`
            This instance, to allow chaining.
        """
        inner = self._inner_for_write(group)
        try:
            inner[key] = value
        finally:
            # An unhashable key leaves a newly created group empty.
            self._prune(group, inner)
        return self

    def delete(self, group: _G, *keys: _K) -> dict[_K, _V]:
        """Remove items from a group.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.
        *keys : `~collections.abc.Hashable`
            Keys of the items to remove.  Keys that are not present are
            ignored.

        Returns
        -------
        removed : `dict`
            Mapping from each removed key to its previous value.  Empty if
            nothing was removed.

        Notes
        -----
        The group itself is removed if it has no items left.
        """
        removed: dict[_K, _V] = {}
        inner = self._groups.get(group)
        if inner is None:
            return removed
        try:
            for key in keys:
                if key in inner:
                    removed[key] = inner.pop(key)
        finally:
            self._prune(group, inner)
        return removed

    def keys_of(self, group: _G) -> Iterator[_K]:
        """Iterate over the keys inside a group (empty if it does not
        exist).
        """
        if (inner := self._groups.get(group)) is not None:
            yield from inner

    def values_of(self, group: _G) -> Iterator[_V]:
        # Docstring inherited.
        if (inner := self._groups.get(group)) is not None:
            yield from inner.values()

    def entries_of(self, group: _G) -> Iterator[tuple[_K, _V]]:
        """Iterate over the ``(key, value)`` pairs inside a group (empty if it
        does not exist).
        """
        if (inner := self._groups.get(group)) is not None:
            yield from inner.items()

    def __iter__(self) -> Iterator[tuple[_G, _K, _V]]:
        for group, inner in self._groups.items():
            for key, value in inner.items():
                yield group, key, value
