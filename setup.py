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

"""Standard setup.py file. Run

$ python setup.py build
# python setup.py install
"""


import os


from setuptools import setup
from setuptools.command.install_lib import install_lib


VERSION = __import__("ovstools").VERSION


class smart_install_lib(install_lib):
    """Replacement for setuptools.command.install_lib to handle
    version file.

    """

    def run(self):
        super().run()
        fullfname = os.path.join(self.install_dir, "ovstools", "__init__.py")
        if not os.path.exists(fullfname):
            return
        tmpfname = "%s.tmp" % fullfname
        stat = os.stat(fullfname)
        os.rename(fullfname, tmpfname)
        with open(fullfname, "w") as newf:
            with open(tmpfname) as oldf:
                for line in oldf:
                    if line.startswith("import "):
                        newf.write("VERSION = %r\n" % VERSION)
                        newf.write("__version__ = VERSION\n")
                        break
                    newf.write(line)
        os.chmod(fullfname, stat.st_mode)
        os.unlink(tmpfname)


with open(
    os.path.join(os.path.abspath(os.path.dirname(__file__)), "README.md")
) as fdesc:
    long_description = fdesc.read()


setup(
    name="ovstools",
    # "unknown.version" (no git, no VERSION file) is not a valid PEP 440 version
    version=VERSION if VERSION != "unknown.version" else "0.0.0",
    author="The OVSTools authors",
    license="GPLv3+",
    description="Open vSwitch helpers and port range to OpenFlow mask compiler",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords=[
        "openvswitch",
        "ovs",
        "openflow",
        "sdn",
        "flow",
        "port range",
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "Intended Audience :: Telecommunications Industry",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Networking",
    ],
    python_requires=">=3.8, <4",
    install_requires=[
        "bottle",
    ],
    extras_require={
        "test": ["coverage"],
    },
    packages=[
        "ovstools",
        "ovstools.tools",
        "ovstools.web",
    ],
    scripts=["bin/ovstools"],
    cmdclass={"install_lib": smart_install_lib},
)
