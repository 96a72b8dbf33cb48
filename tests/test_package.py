import pytest

from slowclient.package import HEADER_SIZE, PackageType, SlowPackage, STTL_MASK


def _full_package():
    return SlowPackage(
        sid=bytes(range(1, 17)),
        sttl=1234567,
        flag_connect=True,
        flag_revive=False,
        flag_ack=True,
        flag_accept_reject=False,
        flag_mb=True,
        seqnum=987654321,
        acknum=123456789,
        window=1024,
        fid=1,
        fo=2,
        data=b"hello world",
    )


def test_default_serializes_to_zero_header():
    assert SlowPackage().serialize() == bytes(HEADER_SIZE)


def test_connect_flag_is_bit_27():
    wire = SlowPackage(flag_connect=True).serialize()
    assert wire[16:20] == b"\x00\x00\x00\x08"


def test_mb_flag_is_top_bit():
    wire = SlowPackage(flag_mb=True).serialize()
    assert wire[19] == 0x80


def test_sid_occupies_first_sixteen_bytes():
    sid = bytes(range(16))
    assert SlowPackage(sid=sid).serialize()[:16] == sid


def test_data_follows_header():
    wire = SlowPackage(data=b"payload").serialize()
    assert len(wire) == HEADER_SIZE + len(b"payload")
    assert wire[HEADER_SIZE:] == b"payload"


def test_round_trip_preserves_all_fields():
    original = _full_package()
    restored = SlowPackage.deserialize(original.serialize())
    assert restored == original


@pytest.mark.parametrize(
    "flag",
    ["flag_connect", "flag_revive", "flag_ack", "flag_accept_reject", "flag_mb"],
)
def test_each_flag_round_trips_alone(flag):
    restored = SlowPackage.deserialize(SlowPackage(**{flag: True}).serialize())
    flags = {
        name: getattr(restored, name)
        for name in (
            "flag_connect",
            "flag_revive",
            "flag_ack",
            "flag_accept_reject",
            "flag_mb",
        )
    }
    assert [name for name, value in flags.items() if value] == [flag]
    assert restored.sttl == 0


def test_sttl_is_limited_to_27_bits():
    restored = SlowPackage.deserialize(SlowPackage(sttl=0xFFFFFFFF).serialize())
    assert restored.sttl == STTL_MASK
    assert not restored.flag_connect
    assert not restored.flag_mb


def test_max_values_round_trip():
    pkg = SlowPackage(
        sttl=STTL_MASK,
        seqnum=0xFFFFFFFF,
        acknum=0xFFFFFFFF,
        window=0xFFFF,
        fid=0xFF,
        fo=0xFF,
    )
    assert SlowPackage.deserialize(pkg.serialize()) == pkg


def test_deserialize_rejects_short_input():
    with pytest.raises(ValueError):
        SlowPackage.deserialize(bytes(HEADER_SIZE - 1))


def test_deserialize_exact_header_has_no_data():
    restored = SlowPackage.deserialize(bytes(HEADER_SIZE))
    assert restored.data == b""
    assert restored.type is PackageType.RAW


def test_deserialize_accepts_bytearray():
    wire = bytearray(_full_package().serialize())
    assert SlowPackage.deserialize(wire).seqnum == 987654321


def test_serialize_rejects_wrong_sid_length():
    with pytest.raises(ValueError):
        SlowPackage(sid=b"\x01\x02").serialize()


def test_describe_lists_sid_and_fields():
    text = _full_package().describe()
    assert text.startswith("SlowPackage: {\n\tsid: 01 02 03 04 05 06 07 08 09 0A 0B 0C")
    assert "seqnum: 987654321" in text
    assert "acknum: 123456789" in text
    assert "data size: 11" in text
    assert text.endswith(" \n}")


def test_describe_prints_flags_as_digits():
    text = SlowPackage(flag_ack=True).describe()
    assert "ack: 1" in text
    assert "connect: 0" in text