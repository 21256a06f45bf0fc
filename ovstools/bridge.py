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


"""This sub-module manages Open vSwitch bridges, their ports and
the underlying network interfaces.

All the functions raise subprocess.CalledProcessError when the
external command fails.

"""


import re
from typing import Dict, List


from ovstools import utils


# "  1(eth0): addr:52:54:00:12:34:56"
_OFPORT = re.compile("^(\\d+)\\(([^)]+)\\):")


def list_all_ofports(bridge: str) -> Dict[str, int]:
    """Returns the OpenFlow port numbers of the ports of `bridge`,
    indexed by port name (the LOCAL port is not reported).

    """
    out = utils.get_cmd_output(utils.ofctl_cmd("show", bridge))
    ports: Dict[str, int] = {}
    for line in out.splitlines():
        line = line.strip()
        if not line or " addr:" not in line or line.startswith("LOCAL"):
            continue
        match = _OFPORT.search(line)
        if match is None:
            utils.LOGGER.warning("Cannot parse port line %r", line)
            continue
        ports[match.group(2)] = int(match.group(1))
    return ports


def set_interface_up(iface: str) -> None:
    utils.run_cmd(utils.ip_cmd("link", "set", iface, "up"))


def create_bridge(name: str, secure_fail_mode: bool = False) -> None:
    """Creates the bridge `name` (when it does not exist) and sets its
    interface up.

    When `secure_fail_mode` is True, the fail mode of the bridge is
    set to "secure" (no flow is added when the controller is
    unreachable).

    """
    args = ["--may-exist", "add-br", name]
    if secure_fail_mode:
        args += ["--", "set-fail-mode", name, "secure"]
    utils.run_cmd(utils.vsctl_cmd(*args))
    set_interface_up(name)


def delete_bridge(name: str) -> None:
    utils.run_cmd(utils.vsctl_cmd("--if-exists", "del-br", name))


def _ofport_request(iface: str, ofport: int) -> List[str]:
    if ofport > 0:
        return ["--", "set", "interface", iface, "ofport_request=%d" % ofport]
    return []


def add_port(bridge: str, iface: str, ofport: int = 0) -> None:
    """Adds the interface `iface` to `bridge`, requesting the OpenFlow
    port number `ofport` unless it is 0.

    """
    utils.run_cmd(
        utils.vsctl_cmd(
            "--may-exist", "add-port", bridge, iface, *_ofport_request(iface, ofport)
        )
    )


def del_port(bridge: str, port: str) -> None:
    utils.run_cmd(utils.vsctl_cmd("--if-exists", "del-port", bridge, port))


def add_patch_port(bridge: str, patch: str, peer: str, ofport: int = 0) -> None:
    """Adds the patch port `patch` to `bridge`; `peer` is the name of
    the patch port at the other end.

    """
    utils.run_cmd(
        utils.vsctl_cmd(
            "--may-exist",
            "add-port",
            bridge,
            patch,
            "--",
            "set",
            "interface",
            patch,
            "type=patch",
            "--",
            "set",
            "interface",
            patch,
            "options:peer=%s" % peer,
            *_ofport_request(patch, ofport),
        )
    )


def add_vxlan_port(
    bridge: str, port: str, local_ip: str, remote_ip: str, ofport: int = 0
) -> None:
    """Adds a VxLAN tunnel port to `bridge`. The VNI is taken from the
    flows (tun_id / set_field), hence in_key=flow and out_key=flow.

    """
    utils.run_cmd(
        utils.vsctl_cmd(
            "--may-exist",
            "add-port",
            bridge,
            port,
            "--",
            "set",
            "interface",
            port,
            "type=vxlan",
            "options:local_ip=%s" % local_ip,
            "options:remote_ip=%s" % remote_ip,
            "options:in_key=flow",
            "options:out_key=flow",
            "options:df_default=true",
            *_ofport_request(port, ofport),
        )
    )
