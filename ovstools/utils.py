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


"""This sub-module contains functions that might be useful to any other
sub-module or script.

"""


import logging
import re
import socket
import subprocess
from typing import List, NamedTuple, Optional, Sequence, Set, Union


from ovstools import config


LOGGER = logging.getLogger("ovstools")
IPV4ADDR = re.compile(
    "^(?:(?:(?:25[0-5]|(?:2[0-4]|1{0,1}[0-9]){0,1}[0-9])\\.){3,3}(?:25[0-5]|(?"
    ":2[0-4]|1{0,1}[0-9]){0,1}[0-9]))$",
    re.I,
)
MACADDR = re.compile("^(?:[0-9a-f]{1,2}:){5}[0-9a-f]{1,2}$", re.I)

# L2 (Ethernet) types
ARP = 0x0806
IPV4 = 0x0800
IPV6 = 0x86DD

# L3 (IP) protocol numbers
ICMP = 1
TCP = 6
UDP = 17
GRE = 47

# OpenFlow actions
DROP = "drop"
LOCAL = "local"
FLOOD = "flood"
NORMAL = "normal"

BROADCAST_MAC = "ff:ff:ff:ff:ff:ff"


logging.basicConfig()


class RangeMaskError(ValueError):
    """Base class for the errors raised when a range cannot be turned
    into masked values.

    """


class InvalidRange(RangeMaskError):
    """The lower bound of the range is greater than its upper bound."""


class OutOfDomain(RangeMaskError):
    """A bound of the range does not fit in the requested bit width."""


class MaskedValue(NamedTuple):
    """A (value, mask) pair, matching every integer `x` such that
    `x & mask == value`.

    """

    value: int
    mask: int


def str2int(string: str) -> int:
    """Parses a decimal or (0x-prefixed) hexadecimal string."""
    return int(string.strip(), 0)


def int2str(value: int) -> str:
    return "%d" % value


def int2hexstr(value: int) -> str:
    return "0x%x" % value


def _check_bits(bits: int) -> int:
    if isinstance(bits, bool) or not isinstance(bits, int) or bits <= 0:
        raise ValueError("Invalid bit width %r" % (bits,))
    return (1 << bits) - 1


def range2masks(low: int, high: int, bits: int = 16) -> List[MaskedValue]:
    """Converts the (inclusive) range [`low`, `high`] of `bits`-bit
    integers to the list of (value, mask) pairs matching exactly the
    integers of that range.

    Each pair covers an aligned block of 2 ** k integers (the k low
    bits of the mask are 0); the blocks are the largest possible,
    taken from `low` upwards, so the result is disjoint and always the
    same for the same input.

    >>> range2masks(1000, 1007)
    [MaskedValue(value=1000, mask=65528)]

    """
    allbits = _check_bits(bits)
    for bound in (low, high):
        if not 0 <= bound <= allbits:
            raise OutOfDomain(
                "Value %r does not fit in %d bits (max %d)" % (bound, bits, allbits)
            )
    if low > high:
        raise InvalidRange("Invalid range %d-%d" % (low, high))
    res = []
    cur = low
    while cur <= high:
        # the block must be aligned on its size (trailing zeros of
        # cur) and must not go past high
        align = (cur & -cur).bit_length() - 1 if cur else bits
        size = min(align, (high - cur + 1).bit_length() - 1)
        res.append(MaskedValue(cur, allbits ^ ((1 << size) - 1)))
        cur += 1 << size
    return res


def masked_match(number: int, value: int, mask: int) -> bool:
    """Returns True iff `number` is matched by the (value, mask) pair."""
    return number & mask == value


def masked2str(value: int, mask: int, bits: int = 16) -> str:
    """Formats a (value, mask) pair the way ovs-ofctl expects it, using
    as many (zero-padded) hex digits as needed for `bits` bits.

    >>> masked2str(1000, 0xFFF8)
    '0x03e8/0xfff8'

    """
    width = (bits + 3) // 4
    return "0x%0*x/0x%0*x" % (width, value, width, mask)


def port_rule_masking(start: int, end: int) -> List[str]:
    """Returns the value/mask strings that match the transport ports
    from `start` to `end` (both included).

    """
    return [
        masked2str(value, mask, bits=config.PORT_BITS)
        for value, mask in range2masks(start, end, bits=config.PORT_BITS)
    ]


def str2range(string: str) -> List[int]:
    """Parses "LOW-HIGH" or a single value (each of them decimal or
    hexadecimal) as a [low, high] list.

    """
    if "-" in string:
        return [str2int(val) for val in string.split("-", 1)]
    value = str2int(string)
    return [value, value]


def normalize_mac(mac: str) -> Optional[str]:
    """Returns the MAC address `mac` as six lower case, zero-padded,
    colon-separated bytes, or None when `mac` is not a valid MAC
    address.

    """
    if not MACADDR.search(mac):
        return None
    return ":".join("%02x" % int(byte, 16) for byte in mac.split(":"))


def ip2hex(ipstr: str) -> str:
    """Returns the IPv4 address `ipstr` as eight hex digits."""
    if not IPV4ADDR.search(ipstr):
        raise ValueError("Invalid IPv4 address %r" % ipstr)
    return socket.inet_aton(ipstr).hex()


#
# External commands
#


def ofctl_cmd(*args: str) -> List[str]:
    """Builds an ovs-ofctl command line, with the configured OpenFlow
    versions.

    """
    cmd = [config.OFCTL_CMD]
    if config.OFCTL_PROTOCOLS:
        cmd += ["-O", config.OFCTL_PROTOCOLS]
    return cmd + list(args)


def vsctl_cmd(*args: str) -> List[str]:
    return [config.VSCTL_CMD] + list(args)


def ip_cmd(*args: str) -> List[str]:
    return [config.IP_CMD] + list(args)


def _run(cmd: Sequence[str]) -> bytes:
    LOGGER.debug("Running %s", " ".join(cmd))
    with subprocess.Popen(
        list(cmd),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    ) as proc:
        out, err = proc.communicate()
    if proc.returncode != 0:
        raise subprocess.CalledProcessError(
            proc.returncode, list(cmd), output=out, stderr=err
        )
    return out


def run_cmd(cmd: Sequence[str]) -> None:
    """Runs `cmd`; raises subprocess.CalledProcessError when it fails."""
    _run(cmd)


def get_cmd_output(cmd: Sequence[str]) -> str:
    """Runs `cmd` and returns its (decoded) standard output, with the
    trailing whitespaces removed.

    """
    return _run(cmd).decode(errors="replace").rstrip()


def cmd_error2str(exc: Union[subprocess.CalledProcessError, OSError]) -> str:
    """Returns a short description of a failed command, for log
    messages.

    """
    if isinstance(exc, subprocess.CalledProcessError):
        err = exc.stderr.decode(errors="replace").strip() if exc.stderr else ""
        cmd = exc.cmd if isinstance(exc.cmd, str) else " ".join(exc.cmd)
        return "%s (exit status %d)%s" % (
            cmd,
            exc.returncode,
            ": %s" % err if err else "",
        )
    return str(exc)


class LogFilter(logging.Filter):
    """A logging filter that prevents duplicate warnings and only reports
    messages with level lower than INFO when config.DEBUG is True.

    """

    MAX_WARNINGS_STORED = 100

    def __init__(self) -> None:
        super().__init__()
        self.warnings: Set[str] = set()

    def filter(self, record: logging.LogRecord) -> bool:
        """Decides whether we should log a record"""
        if record.levelno < logging.INFO:
            return config.DEBUG
        if record.levelno != logging.WARNING:
            return True
        if record.msg in self.warnings:
            return False
        if len(self.warnings) > self.MAX_WARNINGS_STORED:
            self.warnings = set()
        self.warnings.add(record.msg)
        return True


LOGGER.addFilter(LogFilter())
LOGGER.setLevel(1 if config.DEBUG else 20)
