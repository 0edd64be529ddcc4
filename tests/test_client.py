import socket
import threading

import pytest

from gamewire.client import build_request_envelope, main, send_packet
from gamewire.network import Envelope, NetworkUnion, Package


def _closed_port():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _receive_once(srv, received):
    conn, _ = srv.accept()
    with conn:
        received.append(b"".join(iter(lambda: conn.recv(4096), b"")))


def test_default_envelope_carries_pending_request():
    env = Envelope.from_bytes(build_request_envelope())
    assert env.msg_type() == NetworkUnion.Request
    assert env.request().status() == Package.Pending


@pytest.mark.parametrize("status", list(Package))
def test_envelope_round_trips_status(status):
    env = Envelope.from_bytes(build_request_envelope(status))
    assert env.request().status() == status


def test_send_packet_delivers_bytes():
    data = build_request_envelope()
    received = []
    with socket.create_server(("127.0.0.1", 0)) as srv:
        port = srv.getsockname()[1]
        thread = threading.Thread(target=_receive_once, args=(srv, received))
        thread.start()
        send_packet(data, "127.0.0.1", port)
        thread.join(5)
    assert received == [data]


def test_send_packet_refused():
    with pytest.raises(OSError):
        send_packet(b"data", "127.0.0.1", _closed_port())


def test_main_sends_chosen_status():
    received = []
    with socket.create_server(("127.0.0.1", 0)) as srv:
        port = srv.getsockname()[1]
        thread = threading.Thread(target=_receive_once, args=(srv, received))
        thread.start()
        code = main(["--host", "127.0.0.1", "--port", str(port), "--status", "Message"])
        thread.join(5)
    assert code == 0
    assert Envelope.from_bytes(received[0]).request().status() == Package.Message


def test_main_reports_failure(capsys):
    assert main(["--host", "127.0.0.1", "--port", str(_closed_port())]) == 1
    assert capsys.readouterr().err.startswith("write to server failed")