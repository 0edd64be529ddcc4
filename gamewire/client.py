"""Send a Request wrapped in an Envelope to the backend server."""

from __future__ import annotations

import argparse
import socket
import sys

from .flatbuf import Builder
from .network import NetworkUnion, Package, build_envelope, build_request

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000


def build_request_envelope(status: int = Package.Pending) -> bytes:
    """Return a finished Envelope buffer carrying a Request with `status`."""
    builder = Builder(0)
    request = build_request(builder, status)
    envelope = build_envelope(builder, NetworkUnion.Request, request)
    builder.finish(envelope)
    return builder.finished_bytes()


def send_packet(data: bytes, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Connect to the server, send `data` and close the connection."""
    with socket.create_connection((host, port)) as conn:
        conn.sendall(data)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gamewire-client", description="Send a request to the backend server."
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    parser.add_argument(
        "--status",
        choices=[p.name for p in Package],
        default=Package.Pending.name,
        help="status carried by the request",
    )
    args = parser.parse_args(argv)

    data = build_request_envelope(Package[args.status])
    try:
        send_packet(data, args.host, args.port)
    except OSError as exc:
        print(f"write to server failed {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())