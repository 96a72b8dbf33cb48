"""The SLOW protocol packet: a 32-byte little-endian header followed by data."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum

HEADER_SIZE = 32
SID_SIZE = 16
STTL_MASK = 0x07FFFFFF

_HEADER = struct.Struct("<16sIIIHBB")

_BIT_CONNECT = 1 << 27
_BIT_REVIVE = 1 << 28
_BIT_ACK = 1 << 29
_BIT_ACCEPT_REJECT = 1 << 30
_BIT_MB = 1 << 31


class PackageType(Enum):
    """Kinds of packet defined by the protocol."""

    CONNECT = 0
    SETUP = 1
    DATA = 2
    ACK = 3
    RAW = 4


@dataclass
class SlowPackage:
    """One protocol packet; fields are truncated to their wire width on output."""

    sid: bytes = bytes(SID_SIZE)
    sttl: int = 0
    flag_connect: bool = False
    flag_revive: bool = False
    flag_ack: bool = False
    flag_accept_reject: bool = False
    flag_mb: bool = False
    seqnum: int = 0
    acknum: int = 0
    window: int = 0
    fid: int = 0
    fo: int = 0
    data: bytes = b""
    type: PackageType = field(default=PackageType.RAW)

    def serialize(self) -> bytes:
        """Encode the packet into its wire form."""
        sid = bytes(self.sid)
        if len(sid) != SID_SIZE:
            raise ValueError(f"sid must be {SID_SIZE} bytes, got {len(sid)}")

        word = self.sttl & STTL_MASK
        if self.flag_connect:
            word |= _BIT_CONNECT
        if self.flag_revive:
            word |= _BIT_REVIVE
        if self.flag_ack:
            word |= _BIT_ACK
        if self.flag_accept_reject:
            word |= _BIT_ACCEPT_REJECT
        if self.flag_mb:
            word |= _BIT_MB

        header = _HEADER.pack(
            sid,
            word,
            self.seqnum & 0xFFFFFFFF,
            self.acknum & 0xFFFFFFFF,
            self.window & 0xFFFF,
            self.fid & 0xFF,
            self.fo & 0xFF,
        )
        return header + bytes(self.data)

    @classmethod
    def deserialize(cls, data: bytes) -> SlowPackage:
        """Decode a packet; raise ValueError if shorter than the header."""
        raw = bytes(data)
        if len(raw) < HEADER_SIZE:
            raise ValueError(
                f"data too short to deserialize: {len(raw)} bytes, need {HEADER_SIZE}"
            )
        sid, word, seqnum, acknum, window, fid, fo = _HEADER.unpack_from(raw)
        return cls(
            sid=sid,
            sttl=word & STTL_MASK,
            flag_connect=bool(word & _BIT_CONNECT),
            flag_revive=bool(word & _BIT_REVIVE),
            flag_ack=bool(word & _BIT_ACK),
            flag_accept_reject=bool(word & _BIT_ACCEPT_REJECT),
            flag_mb=bool(word & _BIT_MB),
            seqnum=seqnum,
            acknum=acknum,
            window=window,
            fid=fid,
            fo=fo,
            data=raw[HEADER_SIZE:],
        )

    def describe(self) -> str:
        """Multi-line human-readable dump of the packet, for debugging."""
        sid_hex = " ".join(f"{b:02X}" for b in bytes(self.sid))
        return (
            f"SlowPackage: {{\n\tsid: {sid_hex}"
            f",\n sttl: {self.sttl}"
            f",\n \tflags: {{ connect: {int(self.flag_connect)}"
            f",\n \t\trevive: {int(self.flag_revive)}"
            f",\n \t\tack: {int(self.flag_ack)}"
            f",\n \t\taccept_reject: {int(self.flag_accept_reject)}"
            f",\n \t\tmb: {int(self.flag_mb)}"
            f" \n\t}}, seqnum: {self.seqnum}"
            f",\n \tacknum: {self.acknum}"
            f",\n \twindow: {self.window}"
            f",\n \tfid: {self.fid}"
            f",\n \tfo: {self.fo}"
            f",\n \tdata size: {len(self.data)}"
            " \n}"
        )