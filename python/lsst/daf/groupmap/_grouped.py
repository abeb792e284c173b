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

__all__ = ("GroupedCollection",)

from abc import ABC, abstractmethod
from collections.abc import Collection, Hashable, Iterable, Iterator, KeysView, Mapping
from typing import Any, ClassVar, Generic, Self, TypeVar

import pydantic
from lsst.utils.logging import getLogger

from .json import from_json_pydantic, to_json_pydantic

_G = TypeVar("_G", bound=Hashable)
_I = TypeVar("_I", bound=Collection)

_LOG = getLogger(__name__)


class GroupedCollection(ABC, Generic[_G, _I]):
    """Abstract base class for two-level containers that map a group
    identifier to a nested collection.

    Parameters
    ----------
    groups : `~collections.abc.Mapping`, optional
        Initial contents, mapping each group identifier to the items to add to
        it.  Groups whose items are empty are not created.

    Notes
    -----
    The nested ("inner") collection for a group is created implicitly (like
    `~collections.defaultdict`) by the first write to that group, and the
    group is removed as soon as a delete operation leaves its inner collection
    empty.  A group identifier is therefore present if and only if its inner
    collection is non-empty.

    Unlike `~collections.defaultdict`, this class does not implement
    `~collections.abc.MutableMapping`: the outer `dict` is private, and only
    the operations defined here (and by subclasses) can modify it, so the
    auto-create and auto-delete behavior cannot be bypassed.  The one
    exception is `MapMap.get_all`, which returns the live inner mapping.

    Iterators returned by `values_of`, `keys_of` and `__iter__` are
    generators that look up the group when first advanced and then follow
    the live inner collections.  Modifying the container while iterating over
    it has the same (undefined) results as modifying a builtin `dict`, `set`
    or `list` while iterating over it.

    This class provides no internal locking.
    """

    __slots__ = ("_groups", "_next")

    _serializedType: ClassVar[type[pydantic.BaseModel]]

    def __init__(self, groups: Mapping[_G, Iterable[Any]] | None = None):
        self._groups: dict[_G, _I] = {}
        self._next: _I = self._make_inner()
        if groups is not None:
            for group, items in groups.items():
                self._load_group(group, items)

    @classmethod
    @abstractmethod
    def _make_inner(cls) -> _I:
        """Return a new, empty inner collection."""
        raise NotImplementedError()

    @abstractmethod
    def _load_group(self, group: _G, items: Iterable[Any]) -> None:
        """Add all of the given items to a group, through the usual write
        operation for this container type.
        """
        raise NotImplementedError()

    @staticmethod
    def _simplify_inner(inner: _I) -> list[Any]:
        """Return the contents of an inner collection as a `list` suitable for
        the serialized form.
        """
        return list(inner)

    def _inner_for_write(self, group: _G) -> _I:
        """Return the inner collection for a group, inserting an empty one if
        the group does not exist.

        The caller must leave the returned collection non-empty.
        """
        # We use setdefault with an existing empty inner container (_next),
        # since we expect that to usually return an existing object and we
        # don't want the overhead of making a new inner container each time.
        # When we do insert _next, we replace it.
        if (inner := self._groups.setdefault(group, self._next)) is self._next:
            self._next = self._make_inner()
        return inner

    def _prune(self, group: _G, inner: _I) -> None:
        """Remove a group if its inner collection is empty."""
        if not inner:
            del self._groups[group]

    def has(self, group: _G) -> bool:
        """Test whether a group exists.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.

        Returns
        -------
        exists : `bool`
            `True` if the group has a non-empty inner collection.
        """
        return bool(self._groups.get(group))

    def has_sub(self, group: _G, item: Any) -> bool:
        """Test whether an item exists inside a group.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.
        item
            Key (for `MapMap`) or value (for `MapSet` and `MapArray`) to look
            for.

        Returns
        -------
        exists : `bool`
            `True` if the item is present; `False` if it is not or the group
            does not exist.
        """
        inner = self._groups.get(group)
        return inner is not None and item in inner

    def has_all(self, group: _G, *items: Any) -> bool:
        """Test whether all of the given items exist inside a group.

        Returns `False` if the group does not exist, and `True` for an
        existing group when no items are given.
        """
        inner = self._groups.get(group)
        if not inner:
            return False
        return all(item in inner for item in items)

    def has_any(self, group: _G, *items: Any) -> bool:
        """Test whether at least one of the given items exists inside a group.

        Returns `False` if the group does not exist.
        """
        inner = self._groups.get(group)
        if not inner:
            return False
        return any(item in inner for item in items)

    def flush(self, group: _G) -> _I:
        """Remove a whole group and return its inner collection.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.

        Returns
        -------
        inner : `~collections.abc.Collection`
            The removed inner collection, or a new empty one if the group did
            not exist.  Ownership passes to the caller.
        """
        try:
            inner = self._groups.pop(group)
        except KeyError:
            return self._make_inner()
        _LOG.debug("Flushed group %r with %d item(s) from %s.", group, len(inner), type(self).__name__)
        return inner

    def values_of(self, group: _G) -> Iterator[Any]:
        """Iterate over the values inside a group.

        Parameters
        ----------
        group : `~collections.abc.Hashable`
            Group identifier.

        Returns
        -------
        values : `~collections.abc.Iterator`
            Iterator over the group's values in their natural order.  Empty if
            the group does not exist.
        """
        if (inner := self._groups.get(group)) is not None:
            yield from inner

    def keys_of(self, group: _G) -> Iterator[Any]:
        """Iterate over the keys inside a group.

        For containers without a separate key concept this is the same as
        `values_of`.
        """
        return self.values_of(group)

    def size_of(self, group: _G) -> int:
        """Return the number of items in a group (zero if it does not
        exist).
        """
        inner = self._groups.get(group)
        return 0 if inner is None else len(inner)

    def groups(self) -> KeysView[_G]:
        """Return a live view of the group identifiers, in insertion
        order.
        """
        return self._groups.keys()

    def clear(self) -> None:
        """Remove all groups."""
        _LOG.debug("Clearing %d group(s) from %s.", len(self._groups), type(self).__name__)
        self._groups.clear()

    def copy(self) -> Self:
        """Return a copy whose inner collections are independent of those in
        ``self``.
        """
        result = type(self)()
        result._groups = {group: inner.copy() for group, inner in self._groups.items()}  # type: ignore
        return result

    @abstractmethod
    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        raise NotImplementedError()

    def __len__(self) -> int:
        return len(self._groups)

    # An inner collection emptied through MapMap.get_all counts as absent,
    # as it does in has().
    def __contains__(self, group: Any) -> bool:
        return bool(self._groups.get(group))

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._groups == other._groups

    def __repr__(self) -> str:
        return "{}({{{}}})".format(
            type(self).__name__,
            ", ".join(f"{group!r}: {inner!r}" for group, inner in self._groups.items()),
        )

    def to_simple(self) -> pydantic.BaseModel:
        """Convert this instance to a simplified, JSON-serializable object.

        Returns
        -------
        serialized : `pydantic.BaseModel`
            Serializable representation, listing ``(group, items)`` pairs in
            group order.
        """
        return self._serializedType(
            groups=[(group, self._simplify_inner(inner)) for group, inner in self._groups.items()]
        )

    @classmethod
    def from_simple(cls, simple: pydantic.BaseModel) -> Self:
        """Construct a new instance from its simplified form.

        Parameters
        ----------
        simple : `pydantic.BaseModel`
            Value returned by `to_simple`, or a compatible model.

        Returns
        -------
        result : `GroupedCollection`
            New instance.  Groups with no items are not created.

        Raises
        ------
        TypeError
            Raised if a group identifier or set element is not hashable.
        """
        result = cls()
        for group, items in simple.groups:  # type: ignore[attr-defined]
            result._load_group(group, items)
        _LOG.debug("Deserialized %d group(s) into %s.", len(result), cls.__name__)
        return result

    to_json = to_json_pydantic
    from_json = classmethod(from_json_pydantic)  # type: ignore
