"""Encode a sample Monster and read its name back out of the buffer."""

from __future__ import annotations

import argparse

from .flatbuf import Builder
from .sample import Color, Monster, build_monster

SAMPLE_NAME = "MonsterName"
SAMPLE_POS = (1.0, 2.0, 3.0)


def encode_sample_monster() -> bytes:
    """Return a finished buffer holding the sample red monster."""
    builder = Builder(0)
    root = build_monster(builder, SAMPLE_NAME, SAMPLE_POS, Color.Red)
    builder.finish(root)
    return builder.finished_bytes()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gamewire-demo",
        description="Serialize a sample monster and print its decoded name.",
    )
    parser.parse_args(argv)

    buf = encode_sample_monster()
    monster = Monster.from_bytes(buf)
    print(monster.name() or "")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())