import logging

from nvglide.values import (
    parse_bool,
    parse_float,
    parse_i32,
    parse_str,
    parse_u32,
    parse_u64,
)

U64_MAX = 2**64 - 1
I64_MAX = 2**63 - 1


def test_parse_float():
    v0 = 0.0
    v0 = parse_float(v0, 1.0)
    assert v0 == 1.0
    v0 = parse_float(v0, -1)
    assert v0 == -1.0
    v0 = parse_float(v0, U64_MAX)
    assert v0 == float(U64_MAX)
    v0 = parse_float(v0, "asd")
    assert v0 == float(U64_MAX)


def test_parse_u64():
    v0 = parse_u64(0, U64_MAX)
    assert v0 == U64_MAX
    v0 = parse_u64(v0, -1)
    assert v0 == U64_MAX


def test_parse_u32():
    v0 = parse_u32(0, U64_MAX)
    assert v0 == 0xFFFFFFFF
    v0 = parse_u32(v0, -1)
    assert v0 == 0xFFFFFFFF


def test_parse_i32():
    v0 = parse_i32(0, I64_MAX)
    assert v0 == -1
    v0 = parse_i32(v0, -1)
    assert v0 == -1


def test_parse_str():
    v0 = parse_str("foo", "bar")
    assert v0 == "bar"
    v0 = parse_str(v0, -1)
    assert v0 == "bar"


def test_parse_bool():
    v0 = False
    v0 = parse_bool(v0, True)
    assert v0 is True
    v0 = parse_bool(v0, 0)
    assert v0 is False
    v0 = parse_bool(v0, 1)
    assert v0 is True
    v0 = parse_bool(v0, -1)
    assert v0 is True


def test_bool_is_not_a_number():
    assert parse_u64(5, True) == 5
    assert parse_float(2.5, False) == 2.5


def test_rejected_value_logs_error(caplog):
    with caplog.at_level(logging.ERROR, logger="nvglide.values"):
        result = parse_str("keep", 3)
    assert result == "keep"
    assert "expected a string" in caplog.text