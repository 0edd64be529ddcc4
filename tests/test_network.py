import pytest

from gamewire.flatbuf import Builder, FlatBufferError
from gamewire.network import (
    Envelope,
    NetworkUnion,
    Package,
    Request,
    build_envelope,
    build_request,
)


def _envelope_bytes(status, msg_type=NetworkUnion.Request, prefixed=False):
    b = Builder(0)
    req = build_request(b, status)
    env = build_envelope(b, msg_type, req)
    if prefixed:
        b.finish_size_prefixed(env)
    else:
        b.finish(env)
    return b.finished_bytes()


@pytest.mark.parametrize("status", list(Package))
def test_envelope_request_round_trip(status):
    env = Envelope.from_bytes(_envelope_bytes(status))
    assert env.msg_type() is NetworkUnion.Request
    assert env.request().status() is status


def test_size_prefixed_envelope():
    env = Envelope.from_size_prefixed_bytes(_envelope_bytes(Package.Message, prefixed=True))
    assert env.request().status() is Package.Message


def test_none_type_gives_no_request():
    env = Envelope.from_bytes(_envelope_bytes(Package.Pending, msg_type=NetworkUnion.NONE))
    assert env.msg_type() is NetworkUnion.NONE
    assert env.request() is None
    assert env.msg() is not None and env.mutate_msg_type(1) is False


def test_empty_envelope():
    b = Builder(0)
    b.finish(build_envelope(b, NetworkUnion.NONE, 0))
    env = Envelope.from_bytes(b.finished_bytes())
    assert env.msg() is None
    assert env.request() is None


def test_mutations():
    buf = bytearray(_envelope_bytes(Package.Pending))
    env = Envelope.from_bytes(buf)
    assert env.request().mutate_status(Package.CloseConnection) is True
    assert Envelope.from_bytes(buf).request().status() is Package.CloseConnection
    assert env.mutate_msg_type(7) is True
    assert Envelope.from_bytes(buf).msg_type() == 7


def test_default_status_absent():
    b = Builder(0)
    b.finish(build_request(b, Package.Init))
    req = Request.from_bytes(b.finished_bytes())
    assert req.status() is Package.Init
    assert req.mutate_status(Package.Pending) is False


def test_request_size_prefixed():
    b = Builder(0)
    b.finish_size_prefixed(build_request(b, Package.Pending))
    assert Request.from_size_prefixed_bytes(b.finished_bytes()).status() is Package.Pending


def test_enum_names():
    env = Envelope.from_bytes(_envelope_bytes(Package.CloseConnection))
    assert str(env.request().status()) == "CloseConnection"
    assert str(env.msg_type()) == "Request"


def test_garbage_raises():
    with pytest.raises(FlatBufferError):
        Envelope.from_bytes(b"\xff\xff\xff\x7f").msg_type()