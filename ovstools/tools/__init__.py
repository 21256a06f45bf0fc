#! /usr/bin/env python

# This file is part of OVSTools.
# Copyright 2020 - 2026 The OVSTools authors
#
# OVSTools is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# OVSTools is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with OVSTools. If not, see <http://www.gnu.org/licenses/>.


"""This sub-module contains functions to implement ovstools commands."""

from typing import Callable, List, Optional, cast


__all__ = [
    "bridge",
    "flow",
    "httpd",
    "portmask",
    "version",
]


ALIASES = {
    "br": "bridge",
    "flows": "flow",
    "ofctl": "flow",
    "vsctl": "bridge",
    "range2masks": "portmask",
}


def get_command(name: str) -> Optional[Callable[[], None]]:
    if name in ALIASES:
        name = ALIASES[name]
    if name in __all__:
        return cast(
            Callable[[], None],
            getattr(__import__("%s.%s" % (__name__, name)).tools, name).main,
        )
    return None


def guess_command(name: str) -> List[str]:
    if name in __all__:
        return [name]
    if name in ALIASES:
        return [name]
    possible = sorted(cmd for cmd in __all__ if cmd.startswith(name))
    if possible:
        return possible
    return sorted(set(cmd for cmd in ALIASES if cmd.startswith(name)))
