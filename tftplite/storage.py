# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-
"""File access for transfers. Every requested name is resolved under the
server root, and files are always opened in binary mode whatever transfer
mode the client asked for."""

import os
import logging

from typing import BinaryIO

from tftplite.exceptions import TftpException,TftpFileNotFoundError

logger = logging.getLogger('tftplite.storage')

class FileStorage:
    """Reads and writes the files served from a root directory."""

    def __init__(self, root: str) -> None:
        """Prepare the storage

        Args:
            root (str): directory files are served from and stored into

        Raises:
            FileNotFoundError: the root doesn't exist or isn't a directory
            TftpException: the root is not readable and writable
        """

        self.root = os.path.abspath(root)

        if os.path.isdir(self.root):
            logger.debug(f"tftproot {self.root} exists")
            if not os.access(self.root, os.R_OK) or not os.access(self.root, os.W_OK):
                raise TftpException("The tftproot must be readable and writable")
        else:
            raise FileNotFoundError("The tftproot does not exist or isn't a directory")

    def full_path(self, name: str) -> str:
        """Build the path of a requested file and ensure it is contained in
        the root directory.

        Names are relative to the root. A leading '/' is stripped as
        otherwise os.path.join would treat the name as absolute.

        Raises:
            TftpException: the name points outside of the root
        """

        full_path = os.path.abspath(os.path.join(self.root, name.lstrip('/')))
        logger.debug(f"full_path is {full_path}")

        if full_path != self.root and full_path.startswith(os.path.join(self.root, '')):
            return full_path

        logger.warning(f"requested file {name} is not within the server root")
        raise TftpException(f"bad file path: {name}")

    def open_read(self, name: str) -> BinaryIO:
        """Open a file to send it.

        Raises:
            TftpFileNotFoundError: the file can't be opened
            TftpException: bad file path
        """

        path = self.full_path(name)
        logger.info(f"Opening file {path} for reading")

        try:
            return open(path, "rb")
        except OSError as err:
            raise TftpFileNotFoundError(f"File not found: {path}") from err

    def make_subdirs(self, path: str) -> None:
        """Create, if necessary, all of the subdirectories leading up to the
        file to be written."""

        # Split on directory separators, but drop the last one, as it should
        # be the filename.
        dirs = os.path.relpath(path, self.root).split(os.sep)[:-1]
        logger.debug(f"dirs is {dirs}")
        current = self.root

        for dir in dirs:
            current = os.path.join(current, dir)
            if not os.path.isdir(current):
                os.mkdir(current, 0o700)

    def open_write(self, name: str) -> BinaryIO:
        """Open a file to receive it, replacing any existing one.

        Raises:
            OSError: the file can't be created
            TftpException: bad file path
        """

        path = self.full_path(name)
        logger.info(f"Opening file {path} for writing")

        if os.path.exists(path):
            logger.warning(f"File {name} exists already, overwriting...")

        self.make_subdirs(path)
        return open(path, "wb")

    def read_chunk(self, fileobj: BinaryIO, size: int) -> bytes:
        buffer = fileobj.read(size)
        logger.debug(f"Read {len(buffer)} bytes into buffer")
        return buffer

    def append(self, fileobj: BinaryIO, data: bytes) -> None:
        logger.debug(f"Writing {len(data)} bytes to output file")
        fileobj.write(data)

    def close(self, fileobj: BinaryIO) -> None:
        if not fileobj.closed:
            fileobj.close()

    def delete(self, name: str) -> None:
        """Remove a partially received file."""

        path = self.full_path(name)
        logger.info(f"Removing {path}")
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.warning(f"{path} was already gone")
