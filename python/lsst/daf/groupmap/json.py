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

__all__ = ("from_json_pydantic", "to_json_pydantic")

from typing import Any, ClassVar, Protocol

from pydantic import BaseModel


class SupportsSimple(Protocol):
    """Protocol defining the methods required to support the standard
    serialization using "simple" methods names.
    """

    _serializedType: ClassVar[type[BaseModel]]

    def to_simple(self) -> BaseModel: ...

    @classmethod
    def from_simple(cls, simple: Any) -> SupportsSimple: ...


def to_json_pydantic(self: SupportsSimple) -> str:
    """Convert this class to JSON assuming that the ``to_simple()`` returns
    a pydantic model.

    Returns
    -------
    json : `str`
        The class in JSON string format.
    """
    return self.to_simple().model_dump_json()


def from_json_pydantic(cls_: type[SupportsSimple], json_str: str) -> SupportsSimple:
    """Convert from JSON to a pydantic model and then to ``cls_``.

    Parameters
    ----------
    cls_ : `type` of `SupportsSimple`
        The Python type being created.
    json_str : `str`
        The JSON string representing this object.

    Returns
    -------
    constructed : `SupportsSimple`
        Newly-constructed object.

    Raises
    ------
    pydantic.ValidationError
        Raised if the JSON does not match the serialized form of ``cls_``.
    """
    simple = cls_._serializedType.model_validate_json(json_str)
    try:
        return cls_.from_simple(simple)
    except AttributeError as e:
        raise AttributeError(f"JSON deserialization requires {cls_} has a from_simple() class method") from e
