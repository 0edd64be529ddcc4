"""FlatBuffers-compatible game messages and a small TCP backend for them."""

__version__ = "0.1.0"
__all__ = ["flatbuf", "sample", "network", "demo", "server", "client"]