#!/usr/bin/env python
# This file is part of daf_groupmap.
#
# Developed for the LSST Data Management System.
# This product includes software developed by the LSST Project
# (http://www.lsst.org).
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
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

"""Show the grouped collections in action."""

import logging

from lsst.daf.groupmap import MapArray, MapMap, MapSet


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    m = MapMap()
    m.set("users", 1, {"name": "Alice"}).set("users", 2, {"name": "Bob"}).set("orders", "A42", {"total": 99})
    print(m.get("users", 1))
    for group, key, value in m:
        print(group, key, value)

    tags = MapSet().add("tags", "js", "node", "js")
    print(tags.delete("tags", "node"), list(tags.values_of("tags")))

    log = MapArray().add("log", "a", "b").add("log", "a")
    print(log.delete("log", "a"), list(log.values_of("log")))

    print(MapMap.from_json(m.to_json()) == m)
    m.clear()


if __name__ == "__main__":
    main()
