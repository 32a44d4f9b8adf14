"""Reading PCM audio from RIFF/WAVE files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import NamedTuple, Optional, Union

WAVE_FORMAT_PCM = 1

_RIFF_HEADER = struct.Struct("<4sI4s")
_CHUNK_HEADER = struct.Struct("<4sI")
_FMT_BODY = struct.Struct("<HHIIHH")
_EXT_SIZE = struct.Struct("<H")


class WavError(ValueError):
    """The data is not a readable WAVE file."""


@dataclass(frozen=True)
class WaveFormat:
    """PCM format description of the samples."""

    channels: int
    samples_per_sec: int
    bits_per_sample: int
    format_tag: int = WAVE_FORMAT_PCM

    @property
    def block_align(self) -> int:
        return (self.bits_per_sample >> 3) * self.channels

    @property
    def avg_bytes_per_sec(self) -> int:
        return self.block_align * self.samples_per_sec


@dataclass(frozen=True)
class WaveData:
    """Sample format and raw sample bytes."""

    format: WaveFormat
    data: bytes


class _FmtChunk(NamedTuple):
    fmt_id: int
    channels: int
    sample_rate: int
    trans_rate: int
    block_size: int
    quantum_bits: int


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def read(self, count: int) -> bytes:
        end = self.offset + count
        if end > len(self.data):
            raise WavError("truncated WAVE data")
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def skip(self, count: int) -> None:
        self.offset += count


def parse_wav(data: bytes) -> WaveData:
    """Parse the bytes of a WAVE file; 8-bit samples are made signed."""
    data = bytes(data)
    size = len(data)
    reader = _Reader(data)

    tag, _, form = _RIFF_HEADER.unpack(reader.read(_RIFF_HEADER.size))
    if tag != b"RIFF":
        raise WavError("not in RIFF format")
    if form != b"WAVE":
        raise WavError("not in WAVE format")

    fmt: Optional[_FmtChunk] = None
    samples = b""
    while size > reader.offset:
        chunk_tag, chunk_size = _CHUNK_HEADER.unpack(reader.read(_CHUNK_HEADER.size))
        if chunk_tag == b"fmt ":
            fmt = _FmtChunk(*_FMT_BODY.unpack(reader.read(_FMT_BODY.size)))
            if chunk_size > _FMT_BODY.size:
                (ext_size,) = _EXT_SIZE.unpack(reader.read(_EXT_SIZE.size))
                if reader.offset + chunk_size == size:
                    break
                reader.skip(ext_size)
        elif chunk_tag == b"data":
            samples = reader.read(chunk_size)
            if fmt is not None and fmt.quantum_bits == 8:
                samples = bytes(b ^ 0x80 for b in samples)
        else:
            if reader.offset + chunk_size == size:
                break
            reader.skip(chunk_size)

    if fmt is None:
        raise WavError("missing fmt chunk")
    wave_format = WaveFormat(
        channels=fmt.channels,
        samples_per_sec=fmt.sample_rate,
        bits_per_sample=fmt.quantum_bits,
    )
    return WaveData(wave_format, samples)


def load_wav(path: Union[str, PathLike]) -> WaveData:
    """Read and parse a WAVE file from disk."""
    return parse_wav(Path(path).read_bytes())