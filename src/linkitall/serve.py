"""Serve the output directory and rebuild the page on request."""

import functools
import sys
import threading
from collections.abc import Callable
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import TextIO

DEFAULT_LISTEN = ":8101"


def parse_listen_address(address: str) -> tuple[str, int]:
    """Split "host:port" (host may be empty) into (host, port).

    Raises:
        ValueError: If the port is missing or not a number.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address '{address}', expected [host]:port")
    return host, int(port)


class _QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args) -> None:
        return


def start_file_server(directory: Path, address: str) -> ThreadingHTTPServer:
    """Serve directory over HTTP from a daemon thread.

    Args:
        directory: Directory to serve.
        address: Listen address such as ":8101" or "127.0.0.1:8000".

    Returns:
        The running server; call shutdown() to stop it.
    """
    host, port = parse_listen_address(address)
    handler = functools.partial(_QuietHandler, directory=str(directory))
    server = ThreadingHTTPServer((host, port), handler)

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    print(f"Serving {directory} at http://{host or 'localhost'}:{server.server_address[1]}/")
    return server


def read_update_loop(rebuild: Callable[[], None], stream: TextIO | None = None) -> None:
    """Call rebuild each time an empty line is read, until "q" or end of input.

    Any other input is ignored with a warning. Every rebuild is a complete,
    independent run.
    """
    stream = stream or sys.stdin
    while True:
        print("\nq: quit, enter: update output => ", end="", flush=True)
        line = stream.readline()
        if not line:
            print()
            break
        line = line.strip()
        if line == "q":
            break
        if line:
            print(f"Warning: Ignoring input: '{line}'", file=sys.stderr)
            continue
        rebuild()
