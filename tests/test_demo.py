import pytest

from gamewire.demo import encode_sample_monster, main
from gamewire.flatbuf import root_position
from gamewire.sample import Color, Monster


def test_sample_monster_name_round_trips():
    buf = encode_sample_monster()
    assert Monster.from_bytes(buf).name() == "MonsterName"


def test_sample_monster_position_round_trips():
    pos = Monster.from_bytes(encode_sample_monster()).pos()
    assert (pos.x(), pos.y(), pos.z()) == (1.0, 2.0, 3.0)


def test_sample_monster_is_red():
    assert Monster.from_bytes(encode_sample_monster()).color() == Color.Red


def test_encoding_is_deterministic():
    first = encode_sample_monster()
    second = encode_sample_monster()
    assert first == second
    assert len(first) > 0
    assert Monster.from_bytes(second).name() == "MonsterName"


def test_root_lies_inside_buffer():
    buf = encode_sample_monster()
    assert 0 < root_position(buf) < len(buf)


def test_main_prints_name(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "MonsterName\n"


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2