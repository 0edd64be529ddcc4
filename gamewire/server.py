"""A TCP backend that reads one Envelope per connection and reports it."""

from __future__ import annotations

import argparse
import logging
import signal
import socket
import threading

from .flatbuf import FlatBufferError
from .network import Envelope, Package

DEFAULT_PORT = 8000
CHUNK_SIZE = 1024
_POLL_INTERVAL = 0.2

log = logging.getLogger(__name__)


def read_packet(conn: socket.socket) -> bytes:
    """Read from `conn` until the peer closes it and return everything read."""
    chunks: list[bytes] = []
    while True:
        try:
            chunk = conn.recv(CHUNK_SIZE)
        except OSError as exc:
            log.error("error reading from connection: %s", exc)
            break
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def describe_packet(packet: bytes) -> str | None:
    """Return the request status carried by an Envelope, or None if there is none.

    Raises FlatBufferError if the packet cannot be read as an Envelope.
    """
    request = Envelope.from_bytes(packet).request()
    if request is None:
        return None
    log.debug("union request found")
    status = request.status()
    if isinstance(status, Package):
        return str(status)
    return f"Package({status})"


def handle_connection(conn: socket.socket) -> str | None:
    """Read a whole packet from `conn`, close it and print the request status."""
    with conn:
        packet = read_packet(conn)
    log.debug("packet received: %d bytes", len(packet))
    try:
        status = describe_packet(packet)
    except FlatBufferError as exc:
        log.error("malformed packet: %s", exc)
        return None
    if status is not None:
        print(status)
    return status


def serve(
    host: str = "",
    port: int = DEFAULT_PORT,
    stop_event: threading.Event | None = None,
) -> None:
    """Accept connections until `stop_event` is set, one thread per connection."""
    stop = stop_event if stop_event is not None else threading.Event()
    with socket.create_server((host, port)) as listener:
        listener.settimeout(_POLL_INTERVAL)
        log.info("listening on port %d", listener.getsockname()[1])
        log.debug("listening for connections")
        while not stop.is_set():
            try:
                conn, addr = listener.accept()
            except TimeoutError:
                continue
            log.debug("accepted new connection from %s", addr)
            threading.Thread(target=handle_connection, args=(conn,), daemon=True).start()
    log.info("backend server shutting down")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gamewire-server", description="Run the backend server."
    )
    parser.add_argument("--debug", action="store_true", help="enable debug mode")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d %(message)s",
    )
    level = logging.INFO
    if args.debug:
        print("debug mode enabled")
        level = logging.DEBUG
    log.setLevel(level)

    stop = threading.Event()

    def _on_signal(signum, frame):
        stop.set()

    log.debug("listening signals...")
    previous = {
        sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        serve(args.host, args.port, stop)
    except OSError as exc:
        log.error("error creating listener: %s", exc)
        return 1
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())