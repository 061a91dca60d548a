"""Wire format of the window server's commands, and its table of windows."""

import enum
import struct
import threading
from dataclasses import dataclass

TITLE_MAX = 100
MAX_WINDOWS = 1024
COMMAND_BUFFER_SIZE = 512

_HEADER = struct.Struct("<HBI")
_STATUS = struct.Struct("<H")
_POSITION = struct.Struct("<II")

HEADER_SIZE = _HEADER.size
STATUS_SIZE = HEADER_SIZE + _STATUS.size
CREATE_WINDOW_SIZE = HEADER_SIZE + TITLE_MAX
MOVE_WINDOW_SIZE = HEADER_SIZE + _POSITION.size


class Command(enum.IntEnum):
    """Message kinds carried in a command header."""

    STAT = 0
    CREATE_WIN = 1
    MOVE_WIN = 2


class Status(enum.IntEnum):
    """Status codes the server answers commands with."""

    OK = 0
    INV_CMD = 1


class ProtocolError(Exception):
    """Raised when a message does not follow the wire format."""


def _encode_title(title):
    raw = title.encode("utf-8")
    if b"\0" in raw:
        raise ValueError("window title must not contain NUL characters")
    if len(raw) > TITLE_MAX:
        raise ValueError(f"window title is {len(raw)} bytes, at most {TITLE_MAX} fit")
    return raw.ljust(TITLE_MAX, b"\0")


def _decode_title(raw):
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class CommandHeader:
    """Header that starts every message: target window, command and total size."""

    window_id: int
    command: int
    size: int

    def pack(self):
        """Return the header's wire bytes."""
        try:
            return _HEADER.pack(self.window_id, int(self.command), self.size)
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data):
        """Read a header from the start of ``data``."""
        if len(data) < HEADER_SIZE:
            raise ProtocolError(
                f"header needs {HEADER_SIZE} bytes, got {len(data)}"
            )
        return cls(*_HEADER.unpack_from(data))


@dataclass(frozen=True)
class CreateWindow:
    """Request to open a window with the given title."""

    title: str
    window_id: int = 0

    def __post_init__(self):
        _encode_title(self.title)

    def pack(self):
        """Return the command's wire bytes."""
        header = CommandHeader(self.window_id, Command.CREATE_WIN, CREATE_WINDOW_SIZE)
        return header.pack() + _encode_title(self.title)

    @classmethod
    def _from_body(cls, header, body):
        return cls(_decode_title(body), header.window_id)


@dataclass(frozen=True)
class MoveWindow:
    """Request to move a window to a new position."""

    x: int
    y: int
    window_id: int = 0

    def pack(self):
        """Return the command's wire bytes."""
        header = CommandHeader(self.window_id, Command.MOVE_WIN, MOVE_WINDOW_SIZE)
        try:
            position = _POSITION.pack(self.x, self.y)
        except struct.error as exc:
            raise ValueError(f"position out of range: {exc}") from exc
        return header.pack() + position

    @classmethod
    def _from_body(cls, header, body):
        x, y = _POSITION.unpack(body)
        return cls(x, y, header.window_id)


_PARSERS = {
    Command.CREATE_WIN: (CREATE_WINDOW_SIZE, CreateWindow._from_body),
    Command.MOVE_WIN: (MOVE_WINDOW_SIZE, MoveWindow._from_body),
}


def encode_status(status):
    """Return the wire bytes of a status message."""
    header = CommandHeader(0, Command.STAT, STATUS_SIZE)
    return header.pack() + _STATUS.pack(int(status))


def decode_status(data):
    """Parse a status message and return its status."""
    if len(data) != STATUS_SIZE:
        raise ProtocolError(f"status message needs {STATUS_SIZE} bytes, got {len(data)}")
    header = CommandHeader.unpack(data)
    if header.command != Command.STAT or header.size != STATUS_SIZE:
        raise ProtocolError("message is not a status message")
    (value,) = _STATUS.unpack_from(data, HEADER_SIZE)
    try:
        return Status(value)
    except ValueError as exc:
        raise ProtocolError(f"unknown status {value}") from exc


def _recv_exact(sock, size):
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise EOFError("connection closed in the middle of a message")
        data += chunk
    return bytes(data)


def send_status(sock, status):
    """Send a status message over ``sock``."""
    sock.sendall(encode_status(status))


def receive_command(sock):
    """Read one command from ``sock``, acknowledge it and return it.

    Unknown commands are answered with ``Status.INV_CMD``; commands of the
    wrong size get no answer. Both raise ``ProtocolError``.
    """
    header = CommandHeader.unpack(_recv_exact(sock, HEADER_SIZE))
    if not HEADER_SIZE <= header.size <= COMMAND_BUFFER_SIZE:
        raise ProtocolError(f"command size {header.size} is out of range")
    body = _recv_exact(sock, header.size - HEADER_SIZE)

    parser = _PARSERS.get(header.command)
    if parser is None:
        send_status(sock, Status.INV_CMD)
        raise ProtocolError(f"unknown command {header.command}")

    expected_size, build = parser
    if header.size != expected_size:
        raise ProtocolError(
            f"command {header.command} has size {header.size}, expected {expected_size}"
        )

    send_status(sock, Status.OK)
    return build(header, body)


@dataclass
class Window:
    """A window known to the server; ``id`` counts from 1."""

    id: int
    title: str
    x: int = 0
    y: int = 0


class WindowTable:
    """Fixed-capacity table of windows, addressed by 1-based id."""

    def __init__(self):
        self._slots = [None] * MAX_WINDOWS
        self._lock = threading.Lock()

    def add(self, title):
        """Create a window in the first free slot and return it."""
        _encode_title(title)
        with self._lock:
            free = next(
                (index for index, slot in enumerate(self._slots) if slot is None),
                None,
            )
            if free is None:
                raise RuntimeError("window table is full")
            window = Window(free + 1, title)
            self._slots[free] = window
            return window

    def get(self, index):
        """Return the window with id ``index``; id 0 means no window."""
        if index == 0:
            return None
        if not 0 < index <= MAX_WINDOWS:
            raise IndexError(f"window id {index} is out of range")
        return self._slots[index - 1]

    def __len__(self):
        return sum(slot is not None for slot in self._slots)

    def __iter__(self):
        return (slot for slot in self._slots if slot is not None)