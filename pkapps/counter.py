"""Counter service over a Unix socket: the server increments each number it receives."""

import os
import socket
import struct
import sys
import threading
import time

from .fixed import format_hex

SOCKET_PATH = "/tmp/test.sock"

_NUMBER = struct.Struct("<I")
_BACKLOG = 3
_CONNECT_ATTEMPTS = 100
_CONNECT_DELAY = 0.01


def _recv_exact(sock, size):
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            return None
        data += chunk
    return bytes(data)


def serve_counter(path=SOCKET_PATH, ready=None):
    """Accept one client and answer each 32-bit number it sends with that number plus one.

    ``ready`` is set once the socket listens. Returns the number of requests
    answered once the client disconnects.
    """
    print("SERVER: socket()")
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as server:
        print("SERVER: bind()")
        server.bind(path)
        try:
            print("SERVER: listen()")
            server.listen(_BACKLOG)
            if ready is not None:
                ready.set()
            print("SERVER: accept()")
            conn, _ = server.accept()
            answered = 0
            with conn:
                while True:
                    data = _recv_exact(conn, _NUMBER.size)
                    if data is None:
                        return answered
                    (num,) = _NUMBER.unpack(data)
                    conn.sendall(_NUMBER.pack((num + 1) & 0xFFFFFFFF))
                    answered += 1
        finally:
            try:
                os.unlink(path)
            except OSError:
                pass


def _connect(path, out):
    for _ in range(_CONNECT_ATTEMPTS):
        out.write("CLIENT: connect()\n")
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(path)
        except OSError:
            sock.close()
            out.write("CLIENT: connect failed\n")
            time.sleep(_CONNECT_DELAY)
        else:
            return sock
    raise ConnectionError(f"unable to connect to {path}")


def run_client(path=SOCKET_PATH, rounds=None, out=None):
    """Bounce a number off the server ``rounds`` times, or forever; return the last number."""
    out = sys.stdout if out is None else out
    out.write("CLIENT: socket()\n")
    num = 0
    with _connect(path, out) as sock:
        done = 0
        while rounds is None or done < rounds:
            sock.sendall(_NUMBER.pack(num))
            data = _recv_exact(sock, _NUMBER.size)
            if data is None:
                raise ConnectionError("server closed the connection")
            (num,) = _NUMBER.unpack(data)
            out.write(f"CLIENT: num = {format_hex(num)}\n")
            done += 1
    return num


def main(argv=None):
    """Start a counter server and a client talking to it; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 2:
        print("Usage: counter [<socket path> [<rounds>]]", file=sys.stderr)
        return 1
    path = args[0] if args else SOCKET_PATH
    try:
        rounds = int(args[1]) if len(args) == 2 else None
    except ValueError:
        print(f"Invalid round count: {args[1]}", file=sys.stderr)
        return 1

    ready = threading.Event()
    server = threading.Thread(target=serve_counter, args=(path, ready), daemon=True)
    server.start()
    ready.wait(timeout=5)
    try:
        run_client(path, rounds, sys.stdout)
    except ConnectionError as exc:
        print(f"CLIENT: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    server.join(timeout=5)
    return 0