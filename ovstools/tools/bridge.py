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


"""Manage Open vSwitch bridges and ports."""


import argparse
import subprocess
import sys


from ovstools import bridge, utils


def _run(args: argparse.Namespace) -> None:
    if args.command == "list-ports":
        for name, ofport in sorted(
            bridge.list_all_ofports(args.bridge).items(), key=lambda port: port[1]
        ):
            print("%d\t%s" % (ofport, name))
    elif args.command == "add-br":
        bridge.create_bridge(args.bridge, secure_fail_mode=args.secure)
    elif args.command == "del-br":
        bridge.delete_bridge(args.bridge)
    elif args.command == "add-port":
        bridge.add_port(args.bridge, args.iface, ofport=args.ofport)
    elif args.command == "del-port":
        bridge.del_port(args.bridge, args.iface)
    elif args.command == "add-patch":
        bridge.add_patch_port(args.bridge, args.patch, args.peer, ofport=args.ofport)
    elif args.command == "add-vxlan":
        bridge.add_vxlan_port(
            args.bridge, args.port, args.local_ip, args.remote_ip, ofport=args.ofport
        )
    elif args.command == "if-up":
        bridge.set_interface_up(args.iface)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    subp = subparsers.add_parser("list-ports", help="List the ports of a bridge.")
    subp.add_argument("bridge")
    subp = subparsers.add_parser("add-br", help="Create a bridge.")
    subp.add_argument("bridge")
    subp.add_argument(
        "--secure", action="store_true", help='Set the fail mode to "secure".'
    )
    subp = subparsers.add_parser("del-br", help="Delete a bridge.")
    subp.add_argument("bridge")
    subp = subparsers.add_parser("add-port", help="Add an interface to a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("iface")
    subp.add_argument("--ofport", type=int, default=0)
    subp = subparsers.add_parser("del-port", help="Remove a port from a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("iface")
    subp = subparsers.add_parser("add-patch", help="Add a patch port to a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("patch")
    subp.add_argument("peer")
    subp.add_argument("--ofport", type=int, default=0)
    subp = subparsers.add_parser("add-vxlan", help="Add a VxLAN port to a bridge.")
    subp.add_argument("bridge")
    subp.add_argument("port")
    subp.add_argument("local_ip")
    subp.add_argument("remote_ip")
    subp.add_argument("--ofport", type=int, default=0)
    subp = subparsers.add_parser("if-up", help="Set a network interface up.")
    subp.add_argument("iface")
    args = parser.parse_args()
    try:
        _run(args)
    except (subprocess.CalledProcessError, OSError) as exc:
        utils.LOGGER.error("Command %s failed: %s", args.command, utils.cmd_error2str(exc))
        sys.exit(1)
