"""shacrypt.utils.h64 - hash64 encoding helpers

hash64 is the little-endian base64 variant used by the unix crypt family:
each group of 3 bytes ``(v1, v2, v3)`` becomes the 24-bit integer
``v1 + (v2<<8) + (v3<<16)``, which is then written out 6 bits at a time,
least significant bits first, using :data:`CHARS`.
"""
#=================================================================================
#imports
#=================================================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
from shacrypt.utils import HASH64_CHARS
#local
__all__ = [
    "CHARS",

    "decode_bytes",                "encode_bytes",
    "decode_transposed_bytes",     "encode_transposed_bytes",

    "decode_int12", "encode_int12",
    "decode_int18", "encode_int18",
    "decode_int24", "encode_int24",
]

#=================================================================================
#6 bit value <-> char mapping
#=================================================================================
CHARS = HASH64_CHARS

#int -> char
encode_6bit = CHARS.__getitem__

#char -> int
_CHARIDX = dict((c, i) for i, c in enumerate(CHARS))

def decode_6bit(char):
    "decodes single hash64 character -> 6-bit integer"
    try:
        return _CHARIDX[char]
    except KeyError:
        raise ValueError("invalid hash64 character: %r" % (char,))

#=================================================================================
#encode offsets from buffer - used by sha256-crypt & sha512-crypt
#=================================================================================
def encode_bytes(source):
    "encode byte string to h64 format"
    out = []
    write = out.append
    end = len(source)
    tail = end % 3
    end -= tail
    idx = 0
    while idx < end:
        write(encode_int24(source[idx] + (source[idx+1]<<8) + (source[idx+2]<<16)))
        idx += 3
    if tail == 1:
        #NOTE: 4 msb of int are always 0
        write(encode_int12(source[idx]))
    elif tail == 2:
        #NOTE: 2 msb of int are always 0
        write(encode_int18(source[idx] + (source[idx+1]<<8)))
    return "".join(out)

def decode_bytes(source):
    "decode h64 format into byte string"
    out = bytearray()
    end = len(source)
    tail = end % 4
    if tail == 1:
        #only 6 bits left, can't encode a whole byte!
        raise ValueError("input string length cannot be == 1 mod 4")
    end -= tail
    idx = 0
    while idx < end:
        v = decode_int24(source[idx:idx+4])
        out.extend((v & 0xff, (v>>8) & 0xff, v>>16))
        idx += 4
    if tail == 2:
        #NOTE: 4 msb of int are ignored (should be 0)
        out.append(decode_int12(source[idx:idx+2]) & 0xff)
    elif tail == 3:
        #NOTE: 2 msb of int are ignored (should be 0)
        v = decode_int18(source[idx:idx+3])
        out.extend((v & 0xff, (v>>8) & 0xff))
    return bytes(out)

def encode_transposed_bytes(source, offsets):
    "encode byte string to h64 format, using offset list to transpose elements"
    return encode_bytes(bytes(source[off] for off in offsets))

def decode_transposed_bytes(source, offsets):
    "decode h64 format into byte string, then undo specified transposition; inverse of :func:`encode_transposed_bytes`"
    #NOTE: if transposition does not use all bytes of source, original can't be recovered
    tmp = decode_bytes(source)
    if len(tmp) != len(offsets):
        raise ValueError("decoded %d bytes, expected %d" % (len(tmp), len(offsets)))
    buf = bytearray(len(offsets))
    for off, value in zip(offsets, tmp):
        buf[off] = value
    return bytes(buf)

#=================================================================================
#int <-> h64 string
#=================================================================================
def decode_int12(value):
    "decodes 2 char hash64 string -> 12-bit integer (little-endian order)"
    return decode_6bit(value[0]) + (decode_6bit(value[1])<<6)

def encode_int12(value):
    "encodes 12-bit integer -> 2 char hash64 string (little-endian order)"
    return encode_6bit(value & 0x3f) + encode_6bit((value>>6) & 0x3f)

def decode_int18(value):
    "decodes 3 char hash64 string -> 18-bit integer (little-endian order)"
    return (
        decode_6bit(value[0]) +
        (decode_6bit(value[1])<<6) +
        (decode_6bit(value[2])<<12)
        )

def encode_int18(value):
    "encodes 18-bit integer -> 3 char hash64 string (little-endian order)"
    return (
        encode_6bit(value & 0x3f) +
        encode_6bit((value>>6) & 0x3f) +
        encode_6bit((value>>12) & 0x3f)
        )

def decode_int24(value):
    "decodes 4 char hash64 string -> 24-bit integer (little-endian order)"
    return (
        decode_6bit(value[0]) +
        (decode_6bit(value[1])<<6) +
        (decode_6bit(value[2])<<12) +
        (decode_6bit(value[3])<<18)
        )

def encode_int24(value):
    "encodes 24-bit integer -> 4 char hash64 string (little-endian order)"
    return (
        encode_6bit(value & 0x3f) +
        encode_6bit((value>>6) & 0x3f) +
        encode_6bit((value>>12) & 0x3f) +
        encode_6bit((value>>18) & 0x3f)
        )

#=================================================================================
#eof
#=================================================================================
