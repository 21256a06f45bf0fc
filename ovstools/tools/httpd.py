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

"""
This program runs a simple httpd server to provide the OVSTools
(read-only) HTTP API under /api/.

This script should only be used for testing purposes. Production
deployments should use "real" web servers with the WSGI application
ovstools.web.app.application.
"""


from argparse import ArgumentParser, Namespace


from bottle import default_app, run


from ovstools.config import DEBUG
from ovstools.web import app as webapp


def parse_args() -> Namespace:
    parser = ArgumentParser(description=__doc__)
    parser.add_argument(
        "--bind-address",
        "-b",
        default="127.0.0.1",
        help="(IP) Address to bind the server to (defaults to 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8080,
        help="(TCP) Port to use (defaults to 8080)",
    )
    return parser.parse_args()


def main() -> None:
    """Function run when the tool is called."""
    args = parse_args()
    print(__doc__)
    application = default_app()
    application.mount("/api/", webapp.application)
    run(host=args.bind_address, port=args.port, debug=DEBUG)
