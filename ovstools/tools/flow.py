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


"""Manage the flow tables of Open vSwitch bridges."""


import argparse
import subprocess
import sys


from ovstools import flow, utils


def _run(args: argparse.Namespace) -> None:
    if args.command == "dump":
        for line in flow.get_all_flows(args.bridge, names=args.names, stats=args.stats):
            if line:
                print(line)
    elif args.command == "add":
        flow.add_flows(args.bridge, *args.flows)
    elif args.command == "del":
        if args.strict:
            flow.del_flows_strict(args.bridge, args.priority, *args.matches)
        else:
            flow.del_flows(args.bridge, *args.matches)
    elif args.command == "add-range":
        low, high = utils.str2range(args.range)
        flows = flow.port_range_flows(
            args.field,
            low,
            high,
            args.actions,
            match=args.match,
            priority=args.priority,
        )
        if args.dry_run:
            for flw in flows:
                print(flw)
        else:
            flow.add_flows(args.bridge, *flows)
    elif args.command == "arp":
        flow.send_arp_request(
            args.bridge,
            args.output,
            args.in_port,
            args.src_mac,
            args.src_ip,
            args.dst_ip,
            vlan_id=args.vlan,
        )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    subp = subparsers.add_parser("dump", help="Display the flows of a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("--names", action="store_true", help="Display port names.")
    subp.add_argument("--stats", action="store_true", help="Display statistics.")
    subp = subparsers.add_parser("add", help="Add flows to a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("flows", nargs="+", metavar="FLOW")
    subp = subparsers.add_parser("del", help="Delete flows from a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("matches", nargs="+", metavar="MATCH")
    subp.add_argument(
        "--strict",
        action="store_true",
        help="Only delete the flows with exactly this match and priority.",
    )
    subp.add_argument("--priority", type=int, default=32768)
    subp = subparsers.add_parser(
        "add-range",
        help="Add the flows matching a range of values of a field.",
    )
    subp.add_argument("bridge")
    subp.add_argument("field", help="Field name (e.g., tp_dst).")
    subp.add_argument("range", help="LOW-HIGH (decimal or hexadecimal).")
    subp.add_argument("actions", help="Actions of the flows (e.g., drop).")
    subp.add_argument(
        "--match", default="", help="Additional match (e.g., tcp,nw_dst=10.0.0.1)."
    )
    subp.add_argument("--priority", type=int, default=0)
    subp.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Only display the flows.",
    )
    subp = subparsers.add_parser("arp", help="Send an ARP request.")
    subp.add_argument("bridge")
    subp.add_argument("in_port")
    subp.add_argument("output", help="Actions (e.g., output:2).")
    subp.add_argument("src_mac")
    subp.add_argument("src_ip")
    subp.add_argument("dst_ip")
    subp.add_argument("--vlan", type=int, default=0)
    args = parser.parse_args()
    try:
        _run(args)
    except (subprocess.CalledProcessError, OSError) as exc:
        utils.LOGGER.error("Command %s failed: %s", args.command, utils.cmd_error2str(exc))
        sys.exit(1)
    except ValueError as exc:
        utils.LOGGER.error("Invalid value: %s", exc)
        sys.exit(1)
