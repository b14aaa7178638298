"""Named pipes: one side writes typed words, the other prints what arrives."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path
from typing import Any, Iterator

DEFAULT_DIR = "."
DEFAULT_NAME = "myfifo"
READ_SIZE = 1024


def _fifo_path(directory: str | os.PathLike, name: str) -> Path:
    return Path(directory) / name


class Fifo:
    """Creates a named pipe on entry and removes it on exit."""

    def __init__(self, directory: str | os.PathLike = DEFAULT_DIR,
                 name: str = DEFAULT_NAME) -> None:
        self.path = _fifo_path(directory, name)

    def __enter__(self) -> Fifo:
        try:
            os.mkfifo(self.path, 0o666)
        except FileExistsError:
            if not stat.S_ISFIFO(os.stat(self.path).st_mode):
                raise
        else:
            os.chmod(self.path, 0o666)
            print("fifo created")
        return self

    def __exit__(self, *args: Any) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        print("fifo removed")


class FifoEndpoint:
    """One end of a named pipe, opened for reading or for writing."""

    def __init__(self, directory: str | os.PathLike = DEFAULT_DIR,
                 name: str = DEFAULT_NAME) -> None:
        self.path = _fifo_path(directory, name)
        self._fd: int | None = None

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    def _open(self, flags: int) -> int:
        fd = os.open(self.path, flags)
        self._fd = fd
        return fd

    def _require(self) -> int:
        if self._fd is None:
            raise RuntimeError("fifo endpoint is not open")
        return self._fd

    def open_for_read(self) -> int:
        """Open for reading; blocks until a writer opens the pipe."""
        return self._open(os.O_RDONLY)

    def open_for_write(self) -> int:
        """Open for writing; blocks until a reader opens the pipe."""
        return self._open(os.O_WRONLY)

    def read_messages(self) -> Iterator[str]:
        """Yield chunks of text until the writer closes its end."""
        fd = self._require()
        while chunk := os.read(fd, READ_SIZE - 1):
            yield chunk.decode("utf-8", errors="replace")

    def write(self, text: str) -> int:
        """Write ``text``; return the number of bytes written."""
        return os.write(self._require(), text.encode("utf-8"))

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> FifoEndpoint:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def client_main(argv: list[str] | None = None) -> int:
    """Print everything written into the pipe until the writer leaves."""
    args = sys.argv[1:] if argv is None else argv
    directory = args[0] if args else DEFAULT_DIR
    endpoint = FifoEndpoint(directory)
    try:
        endpoint.open_for_read()
    except OSError as exc:
        print(f"open: {exc}", file=sys.stderr)
        return 1
    with endpoint:
        for message in endpoint.read_messages():
            print(f"received: {message}")
    print("writer exited, exiting too")
    return 0


def server_main(argv: list[str] | None = None) -> int:
    """Create the pipe and write each word typed on standard input into it."""
    args = sys.argv[1:] if argv is None else argv
    directory = args[0] if args else DEFAULT_DIR
    with Fifo(directory):
        with FifoEndpoint(directory) as endpoint:
            endpoint.open_for_write()
            while True:
                print("enter text to send:")
                line = sys.stdin.readline()
                if not line:
                    break
                for word in line.split():
                    endpoint.write(word)
                    print(f"sent: {word}")
    return 0