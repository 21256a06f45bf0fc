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


"""Converts integer (e.g., port) ranges to masked OpenFlow matches."""


import argparse
import sys


from ovstools import config, utils


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "ranges",
        nargs="+",
        metavar="RANGE",
        help="Range to convert (LOW-HIGH or a single value, decimal or "
        "0x-prefixed hexadecimal).",
    )
    parser.add_argument(
        "--bits",
        "-b",
        type=int,
        default=config.PORT_BITS,
        help="Width of the field in bits (defaults to %d)." % config.PORT_BITS,
    )
    parser.add_argument(
        "--field",
        "-f",
        metavar="NAME",
        help="Output match fragments for field NAME (e.g., tp_dst).",
    )
    args = parser.parse_args()
    for rng in args.ranges:
        try:
            low, high = utils.str2range(rng)
            masks = utils.range2masks(low, high, bits=args.bits)
        except ValueError as exc:
            utils.LOGGER.error("Cannot convert range %r: %s", rng, exc)
            sys.exit(1)
        for value, mask in masks:
            rule = utils.masked2str(value, mask, bits=args.bits)
            if args.field:
                print("%s=%s" % (args.field, rule))
            else:
                print(rule)
