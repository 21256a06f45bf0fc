#! /usr/bin/env python
# -*- coding: utf-8 -*-

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

"""This sub-module handles configuration values.

It contains the (hard-coded) default values, which can be overwritten
by /etc/ovstools.conf, /etc/ovstools/ovstools.conf,
/usr/local/etc/ovstools.conf, /usr/local/etc/ovstools/ovstools.conf,
~/.ovstools.conf and/or the file named by $OVSTOOLS_CONF.

"""


import os
from typing import Generator, List, Optional


# Default values:
DEBUG = False
# Begin commands
IP_CMD = "ip"
VSCTL_CMD = "ovs-vsctl"
OFCTL_CMD = "ovs-ofctl"
# End commands
# OpenFlow versions passed to ovs-ofctl with -O (e.g. "OpenFlow13");
# None means that the ovs-ofctl default is used.
OFCTL_PROTOCOLS: Optional[str] = None
# Width (in bits) of the transport port fields (tp_src, tp_dst,
# tcp_dst, udp_src, ...).
PORT_BITS = 16

# None means that only the server itself is an allowed referer;
# False disables the check.
WEB_ALLOWED_REFERERS = None


def get_config_file(paths: Optional[List[str]] = None) -> Generator[str, None, None]:
    """Generates (yields) the available config files, in the correct order."""
    if paths is None:
        paths = [
            os.path.join(path, "ovstools.conf")
            for path in [
                "/etc",
                "/etc/ovstools",
                "/usr/local/etc",
                "/usr/local/etc/ovstools",
            ]
        ]
        paths.append(os.path.join(os.path.expanduser("~"), ".ovstools.conf"))
        if "OVSTOOLS_CONF" in os.environ:
            paths.append(os.environ["OVSTOOLS_CONF"])
    for path in paths:
        if os.path.isfile(path):
            yield path


for fname in get_config_file():
    # pylint: disable=exec-used
    with open(fname, "rb") as fdesc:
        exec(compile(fdesc.read(), fname, "exec"))
