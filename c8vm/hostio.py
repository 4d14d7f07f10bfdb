#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading program binaries for later writing into RAM.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import RAM_SIZE, PROGRAM_LOC


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        f = open(filename, "rb")
        data = f.read()
        f.close()
        return data

    def load_program(self, filename):
        data = self.load_binary(filename)

        if len(data) > RAM_SIZE - PROGRAM_LOC:
            raise LoaderError("Program is too large to fit in memory ({} bytes)".format(len(data)))

        return data
