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


"""Display OVSTools' version"""


from importlib.metadata import PackageNotFoundError, version as get_version
import os
import shutil
import sys

from ovstools import VERSION, config


def main() -> None:
    """Display OVSTools' version"""
    print("OVSTools - Open vSwitch helpers")
    print("Copyright 2020 - 2026 The OVSTools authors")
    print("Version %s" % VERSION)
    print()
    print("Python %s" % sys.version)
    print()
    try:
        print(" ".join(str(elt) for elt in os.uname()))
    except AttributeError:
        # Windows OS don't have os.uname()
        print(sys.platform)
    print()
    print("Dependencies:")
    for module in ["bottle"]:
        try:
            modversion = get_version(module)
        except PackageNotFoundError:
            modversion = "*missing*"
        print(f"    {module}: {modversion}")
    print()
    print("Commands:")
    for cmd in [config.IP_CMD, config.VSCTL_CMD, config.OFCTL_CMD]:
        print(f"    {cmd}: {shutil.which(cmd) or '*missing*'}")
    print()
