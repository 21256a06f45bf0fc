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
This module provides a read-only HTTP API on top of OVSTools.

It is used by the integrated web server (ovstools httpd) and can be
used as a WSGI application.
"""


from functools import wraps
import json
import subprocess


from bottle import Bottle, request, response


from ovstools import VERSION, bridge, config, flow, utils


application = Bottle()

# Widest field accepted by /portmask (IPv6 addresses)
MAX_BITS = 128


#
# Utils
#


def _json(value, status=200):
    response.set_header("Content-Type", "application/json")
    response.status = status
    return json.dumps(value)


def check_referer(func):
    """Wrapper for route functions to implement a basic anti-CSRF check
    based on the Referer: header.

    It will abort (status code 400) if the referer is invalid.

    """

    if config.WEB_ALLOWED_REFERERS is False:
        return func

    def _die(referer):
        utils.LOGGER.critical("Invalid Referer header [%r]", referer)
        return _json({"error": "Invalid Referer header"}, status=400)

    @wraps(func)
    def _newfunc(*args, **kargs):

        # Requests with an X-API-Key header or an Authorization:
        # Bearer XXX header are OK. Note: the values are not checked,
        # they only serve as anti-CSRF protections.
        if request.headers.get("X-API-Key") or (
            request.headers.get("Authorization")
            and (
                request.headers.get("Authorization", "").split(None, 1)[0].lower()
                == "bearer"
            )
        ):
            return func(*args, **kargs)

        referer = request.headers.get("Referer")
        if not referer:
            return _die(referer)
        if config.WEB_ALLOWED_REFERERS is None:
            base_url = "/".join(request.url.split("/", 3)[:3]) + "/"
            if referer.startswith(base_url):
                return func(*args, **kargs)
        elif (
            # pylint: disable=unsupported-membership-test
            referer
            in config.WEB_ALLOWED_REFERERS
        ):
            return func(*args, **kargs)
        return _die(referer)

    return _newfunc


def _cmd_failed(exc):
    utils.LOGGER.error("Command failed: %s", utils.cmd_error2str(exc))
    return _json({"error": "Command failed"}, status=500)


#
# Configuration
#


@application.get("/config")
@check_referer
def get_config():
    """Returns the version and the configured commands

    :status 200: no error
    :status 400: invalid referer
    :>json string version: the OVSTools version
    :>json object commands: the external commands used

    """
    return _json(
        {
            "version": VERSION,
            "commands": {
                "ip": config.IP_CMD,
                "vsctl": config.VSCTL_CMD,
                "ofctl": config.OFCTL_CMD,
            },
            "ofctl_protocols": config.OFCTL_PROTOCOLS,
            "port_bits": config.PORT_BITS,
        }
    )


#
# Range to masks
#


@application.get("/portmask")
@check_referer
def get_portmask():
    """Converts a range to (value, mask) pairs

    :query int start: the first value of the range
    :query int end: the last value of the range (defaults to start)
    :query int bits: the width of the field, 1 to MAX_BITS (defaults to
        PORT_BITS)
    :query str field: the field name used to build the rules
    :status 200: no error
    :status 400: invalid referer or invalid range
    :>jsonarr int value: the value
    :>jsonarr int mask: the mask
    :>jsonarr str rule: the value/mask (or field=value/mask) string

    """
    try:
        start = utils.str2int(request.query.get("start", ""))
        end = utils.str2int(request.query.get("end") or str(start))
        bits = int(request.query.get("bits") or config.PORT_BITS)
        if not 1 <= bits <= MAX_BITS:
            raise ValueError("Invalid bit width %d (max %d)" % (bits, MAX_BITS))
        masks = utils.range2masks(start, end, bits=bits)
    except ValueError as exc:
        return _json({"error": str(exc)}, status=400)
    field = request.query.get("field")
    result = []
    for value, mask in masks:
        rule = utils.masked2str(value, mask, bits=bits)
        if field:
            rule = "%s=%s" % (field, rule)
        result.append({"value": value, "mask": mask, "rule": rule})
    return _json(result)


#
# Bridges & flows
#


@application.get("/ofports/<brname>")
@check_referer
def get_ofports(brname):
    """Returns the OpenFlow port numbers of a bridge

    :param str brname: the bridge name
    :status 200: no error
    :status 400: invalid referer
    :status 500: ovs-ofctl failed
    :>json object: port number, indexed by port name

    """
    try:
        return _json(bridge.list_all_ofports(brname))
    except (subprocess.CalledProcessError, OSError) as exc:
        return _cmd_failed(exc)


@application.get("/flows/<brname>")
@check_referer
def get_flows(brname):
    """Returns the flows of a bridge

    :param str brname: the bridge name
    :query bool names: display port names
    :query bool stats: display statistics
    :status 200: no error
    :status 400: invalid referer
    :status 500: ovs-ofctl failed
    :>jsonarr str: the flows

    """
    try:
        flows = flow.get_all_flows(
            brname,
            names=request.query.get("names") in {"1", "true"},
            stats=request.query.get("stats") in {"1", "true"},
        )
    except (subprocess.CalledProcessError, OSError) as exc:
        return _cmd_failed(exc)
    return _json([flw for flw in flows if flw])
