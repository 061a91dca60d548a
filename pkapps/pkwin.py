"""Window server listening on a Unix socket, and a client that opens a window."""

import logging
import socket
import sys
import threading
import time

from .packet import (
    STATUS_SIZE,
    CreateWindow,
    ProtocolError,
    WindowTable,
    decode_status,
    receive_command,
)

SOCKET_PATH = "/tmp/pkw.sock"
DEFAULT_TITLE = "test win"

_BACKLOG = 3
_CONNECT_ATTEMPTS = 100
_CONNECT_DELAY = 0.01

_log = logging.getLogger(__name__)


def handle_client(sock, windows):
    """Serve commands from one client until it disconnects.

    Returns the number of windows the client created.
    """
    created = 0
    while True:
        try:
            command = receive_command(sock)
        except (EOFError, ConnectionError):
            return created
        except ProtocolError as exc:
            _log.warning("Rejected message: %s", exc)
            continue

        _log.info("Got message")
        if isinstance(command, CreateWindow):
            windows.add(command.title)
            created += 1


def _serve_client(conn, windows):
    with conn:
        handle_client(conn, windows)


def serve(path=SOCKET_PATH, windows=None):
    """Listen on the Unix socket at ``path`` and serve each client in its own thread."""
    windows = WindowTable() if windows is None else windows
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as server:
        server.bind(path)
        server.listen(_BACKLOG)
        _log.info("Starting accept loop")
        while True:
            conn, _ = server.accept()
            _log.info("Socket accepted")
            threading.Thread(
                target=_serve_client, args=(conn, windows), daemon=True
            ).start()


def _connect(path):
    for _ in range(_CONNECT_ATTEMPTS):
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(path)
        except OSError:
            sock.close()
            time.sleep(_CONNECT_DELAY)
        else:
            return sock
    raise ConnectionError(f"unable to connect to {path}")


def create_window(path=SOCKET_PATH, title=DEFAULT_TITLE):
    """Ask the server at ``path`` to open a window; return the server's status."""
    message = CreateWindow(title).pack()
    with _connect(path) as sock:
        sock.sendall(message)
        with sock.makefile("rb") as reader:
            return decode_status(reader.read(STATUS_SIZE))


def main(argv=None):
    """Run the window server; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 1:
        print("Invalid arguments\nUsage: pkwin [<socket path>]", file=sys.stderr)
        return 1

    path = args[0] if args else SOCKET_PATH
    print("Open socket")
    try:
        serve(path)
    except OSError as exc:
        print(f"Error binding server socket: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0