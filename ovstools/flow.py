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


"""This sub-module manages the flow tables of Open vSwitch bridges
using ovs-ofctl.

"""


from typing import List


from ovstools import utils


# Ethernet broadcast + ARP request (who-has) header; the target MAC
# is the broadcast address as well.
ARP_PACKET = "ffffffffffff%s%s08060001080006040001%s%sffffffffffff%s"


def get_all_flows(bridge: str, names: bool = False, stats: bool = False) -> List[str]:
    """Returns the flows of `bridge`, one string per line of the
    ovs-ofctl dump-flows output.

    `names` asks ovs-ofctl to display port names instead of numbers,
    `stats` to include the flows statistics (duration, n_packets,
    ...).

    """
    out = utils.get_cmd_output(
        utils.ofctl_cmd(
            "--names" if names else "--no-names",
            "--stats" if stats else "--no-stats",
            "dump-flows",
            bridge,
        )
    )
    return out.split("\n")


def add_flows(bridge: str, *flows: str) -> None:
    for flw in flows:
        utils.run_cmd(utils.ofctl_cmd("add-flow", bridge, flw))


def del_flows(bridge: str, *matches: str) -> None:
    for match in matches:
        utils.run_cmd(utils.ofctl_cmd("del-flows", bridge, match))


def del_flows_strict(bridge: str, priority: int, *matches: str) -> None:
    """Deletes the flows whose priority and match are exactly
    `priority` and one of `matches`.

    """
    for match in matches:
        utils.run_cmd(
            utils.ofctl_cmd(
                "--strict", "del-flows", bridge, "priority=%d,%s" % (priority, match)
            )
        )


def port_range_matches(field: str, start: int, end: int) -> List[str]:
    """Returns the match fragments (e.g., "tp_dst=0x03e8/0xfff8") that,
    together, match the values of `field` from `start` to `end`.

    One flow is needed per fragment.

    """
    return ["%s=%s" % (field, rule) for rule in utils.port_rule_masking(start, end)]


def build_arp_request(src_mac: str, src_ip: str, dst_ip: str, vlan_id: int = 0) -> str:
    """Returns the hex-encoded broadcast ARP request, sent from
    (`src_mac`, `src_ip`) and asking for `dst_ip`. When `vlan_id` is
    not 0, an 802.1Q header is added.

    """
    mac = utils.normalize_mac(src_mac)
    if mac is None:
        raise ValueError("Invalid source MAC address %r" % src_mac)
    mac = mac.replace(":", "")
    if not 0 <= vlan_id <= 0xFFFF:
        raise ValueError("Invalid VLAN id %r" % (vlan_id,))
    vlan = "8100%04x" % vlan_id if vlan_id else ""
    return ARP_PACKET % (
        mac,
        vlan,
        mac,
        utils.ip2hex(src_ip),
        utils.ip2hex(dst_ip),
    )


def send_arp_request(
    bridge: str,
    output: str,
    in_port: str,
    src_mac: str,
    src_ip: str,
    dst_ip: str,
    vlan_id: int = 0,
) -> None:
    """Sends an ARP request through `bridge`; `output` holds the
    actions applied to the packet (e.g., "output:2").

    """
    packet = build_arp_request(src_mac, src_ip, dst_ip, vlan_id=vlan_id)
    utils.LOGGER.debug(
        "Sending ARP request for %s from %s on %s (vlan %d)",
        dst_ip,
        src_ip,
        bridge,
        vlan_id,
    )
    utils.run_cmd(utils.ofctl_cmd("packet-out", bridge, in_port, output, packet))


def port_range_flows(
    field: str,
    start: int,
    end: int,
    actions: str,
    match: str = "",
    priority: int = 0,
) -> List[str]:
    """Returns the flows applying `actions` to the packets matching
    `match` whose `field` is between `start` and `end`.

    """
    prefix = "priority=%d," % priority if priority else ""
    if match:
        prefix += "%s," % match
    return [
        "%s%s,actions=%s" % (prefix, rule, actions)
        for rule in port_range_matches(field, start, end)
    ]