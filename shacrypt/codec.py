"""shacrypt.codec - parsing & rendering of sha-crypt strings

the format handled here is::

    $<ident>$[rounds=<N>$]<salt>$<checksum>

where ``<ident>`` is ``5`` (sha256-crypt) or ``6`` (sha512-crypt).
"""
#=========================================================
#imports
#=========================================================
#core
from collections import namedtuple
import logging; log = logging.getLogger(__name__)
import re
#pkg
from shacrypt.exc import MalformedHashError
from shacrypt.handlers.sha2_crypt import VARIANTS, get_variant
from shacrypt.utils import to_native_str
#local
__all__ = [
    "ParsedHash",
    "parse",
    "render",
    "identify",
    "encode_checksum",
    "decode_checksum",
]

#=========================================================
#constants
#=========================================================
SEP = "$"
ROUNDS_PREFIX = "rounds="

_rounds_re = re.compile(r"^[0-9]+\Z")

#: components of a parsed crypt string; ``rounds`` is None if not present
ParsedHash = namedtuple("ParsedHash", "ident rounds salt checksum")

#=========================================================
#checksum encoding
#=========================================================
def encode_checksum(digest, ident):
    "encode raw digest bytes into checksum string using ident's transposition table"
    return get_variant(ident).encode(digest)

def decode_checksum(checksum, ident):
    """decode checksum string into raw digest bytes; inverse of :func:`encode_checksum`

    :raises ValueError: if checksum has wrong size or contains non-hash64 chars
    """
    return get_variant(ident).decode(checksum)

#=========================================================
#parsing
#=========================================================
def identify(hash):
    "check if *hash* looks like a sha-crypt string (prefix check only)"
    if not hash:
        return False
    if isinstance(hash, bytes):
        try:
            hash = hash.decode("utf-8")
        except UnicodeDecodeError:
            return False
    if not isinstance(hash, str):
        return False
    return any(hash.startswith(SEP + ident + SEP) for ident in VARIANTS)

def parse(hash):
    """parse crypt string into its components

    :arg hash: crypt string, as str or bytes

    :raises shacrypt.exc.MalformedHashError:
        if the string can't be parsed. out-of-range rounds values
        are rejected here, never clamped.

    :returns: :class:`ParsedHash` instance
    """
    if not hash:
        raise MalformedHashError("no hash specified")
    try:
        hash = to_native_str(hash, param="hash")
    except UnicodeDecodeError:
        raise MalformedHashError("hash is not valid utf-8")

    parts = hash.split(SEP)
    if len(parts) not in (4, 5) or parts[0]:
        raise MalformedHashError("wrong number of '$' separated fields")

    ident = parts[1]
    variant = VARIANTS.get(ident)
    if variant is None:
        raise MalformedHashError("unsupported algorithm: %r" % (ident,))

    if len(parts) == 5:
        field = parts[2]
        if not field.startswith(ROUNDS_PREFIX):
            raise MalformedHashError("invalid rounds field: %r" % (field,), variant.name)
        value = field[len(ROUNDS_PREFIX):]
        if not _rounds_re.match(value):
            raise MalformedHashError("invalid rounds field: %r" % (field,), variant.name)
        #strip leading zeros, anything still longer than max_rounds is out of range
        digits = value.lstrip("0") or "0"
        if len(digits) > len(str(variant.max_rounds)):
            raise MalformedHashError("rounds out of range: %s..." % (digits[:12],), variant.name)
        rounds = int(digits)
        if rounds < variant.min_rounds or rounds > variant.max_rounds:
            raise MalformedHashError("rounds out of range: %d" % (rounds,), variant.name)
    else:
        rounds = None

    salt = parts[-2]
    if len(salt.encode("utf-8")) > variant.max_salt_size:
        raise MalformedHashError("salt too long", variant.name)

    checksum = parts[-1]
    if not checksum:
        raise MalformedHashError("empty checksum", variant.name)

    return ParsedHash(ident, rounds, salt, checksum)

#=========================================================
#rendering
#=========================================================
def render(ident, salt, checksum, rounds=None):
    "render crypt string from components; ``rounds=None`` omits the rounds field"
    if rounds is None:
        return "$%s$%s$%s" % (ident, salt, checksum)
    return "$%s$rounds=%d$%s$%s" % (ident, rounds, salt, checksum)

#=========================================================
#eof
#=========================================================
