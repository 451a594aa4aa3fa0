"""shacrypt.handlers.sha2_crypt - SHA256/512-CRYPT digest construction

implements the algorithm from "Unix crypt using SHA-256 and SHA-512"
(Ulrich Drepper, version 0.4 2008-04-03),
see http://www.akkadia.org/drepper/SHA-crypt.txt
"""
#=========================================================
#imports
#=========================================================
#core
from hashlib import sha256, sha512
import logging; log = logging.getLogger(__name__)
#pkg
from shacrypt.exc import UnsupportedAlgorithmError
from shacrypt.utils import h64, repeat_to_length
#local
__all__ = [
    "raw_sha_crypt",
    "ShaCryptVariant",
    "VARIANTS",
    "get_variant",
    "SHA256_IDENT",
    "SHA512_IDENT",
]

#=========================================================
#constants
#=========================================================
SHA256_IDENT = "5"
SHA512_IDENT = "6"

DEFAULT_ROUNDS = 5000
MIN_ROUNDS = 1000
MAX_ROUNDS = 999999999

MAX_SALT_SIZE = 16

#=========================================================
#pure-python backend (shared between sha256-crypt & sha512-crypt)
#=========================================================
def raw_sha_crypt(secret, salt, rounds, hash):
    """perform raw sha crypt

    :arg secret: password to encode, as bytes
    :arg salt: salt to use, as bytes (already truncated & validated)
    :arg rounds: int rounds (already clamped)
    :arg hash: hashlib constructor, :func:`hashlib.sha256` or :func:`hashlib.sha512`

    :returns:
        the final digest, as ``hash().digest_size`` raw bytes.
    """
    if not isinstance(secret, bytes):
        raise TypeError("secret must be encoded as bytes")
    if not isinstance(salt, bytes):
        raise TypeError("salt must be encoded as bytes")

    secret_size = len(secret)
    salt_size = len(salt)

    #calc digest B
    b = hash(secret + salt + secret).digest()

    #begin digest A; B extended to the length of the secret
    a_hash = hash(secret + salt + repeat_to_length(b, secret_size))

    #for each bit in len(secret), lsb first, add B or secret
    i = secret_size
    while i > 0:
        if i & 1:
            a_hash.update(b)
        else:
            a_hash.update(secret)
        i >>= 1

    #finish A
    a = a_hash.digest()

    #calc P - hash of secret repeated len(secret) times, extended to size of secret
    dp = hash(secret * secret_size).digest()
    p = repeat_to_length(dp, secret_size)

    #calc S - hash of salt repeated 16+A[0] times, extended to size of salt
    ds = hash(salt * (16 + a[0])).digest()
    s = repeat_to_length(ds, salt_size)

    #calc digest C
    c = a
    for r in range(rounds):
        odd = r & 1
        data = p if odd else c
        if r % 3:
            data += s
        if r % 7:
            data += p
        data += c if odd else p
        c = hash(data).digest()

    return c

#=========================================================
#algorithm variants
#=========================================================
def _flatten_groups(groups):
    """turn the published byte groups into h64 transposition offsets.

    Drepper lists each group ``(c, b, a)`` as encoded into
    ``w = c<<16 | b<<8 | a``; :func:`h64.encode_bytes` reads its input
    little-endian, so each group goes in reversed.
    """
    return tuple(off for group in groups for off in reversed(group))

_256_groups = (
    (0, 10, 20), (21, 1, 11), (12, 22, 2), (3, 13, 23), (24, 4, 14),
    (15, 25, 5), (6, 16, 26), (27, 7, 17), (18, 28, 8), (9, 19, 29),
    (31, 30),
)

_512_groups = (
    (0, 21, 42), (22, 43, 1), (44, 2, 23), (3, 24, 45), (25, 46, 4),
    (47, 5, 26), (6, 27, 48), (28, 49, 7), (50, 8, 29), (9, 30, 51),
    (31, 52, 10), (53, 11, 32), (12, 33, 54), (34, 55, 13), (56, 14, 35),
    (15, 36, 57), (37, 58, 16), (59, 17, 38), (18, 39, 60), (40, 61, 19),
    (62, 20, 41),
    (63,),
)

class ShaCryptVariant(object):
    """parameters of one member of the sha-crypt family

    :ivar ident: identifier used in ``$<ident>$`` prefix
    :ivar name: descriptive name (``"sha256_crypt"``, ``"sha512_crypt"``)
    :ivar hash: hashlib constructor for the underlying digest
    :ivar digest_size: size of raw digest in bytes
    :ivar checksum_size: size of h64-encoded digest in chars
    :ivar offsets: h64 transposition table for the encoded digest
    """
    default_rounds = DEFAULT_ROUNDS
    min_rounds = MIN_ROUNDS
    max_rounds = MAX_ROUNDS
    max_salt_size = MAX_SALT_SIZE

    def __init__(self, ident, name, hash, checksum_size, groups):
        self.ident = ident
        self.name = name
        self.hash = hash
        self.digest_size = hash().digest_size
        self.checksum_size = checksum_size
        self.offsets = _flatten_groups(groups)
        assert sorted(self.offsets) == list(range(self.digest_size)), \
            "transposition table must use every digest byte once"

    def raw(self, secret, salt, rounds):
        "run the digest construction; returns raw digest bytes"
        return raw_sha_crypt(secret, salt, rounds, self.hash)

    def encode(self, digest):
        "encode raw digest into the variant's checksum string"
        if len(digest) != self.digest_size:
            raise ValueError("%s digest must be %d bytes, not %d" %
                             (self.name, self.digest_size, len(digest)))
        out = h64.encode_transposed_bytes(digest, self.offsets)
        assert len(out) == self.checksum_size, "wrong length: %r" % (out,)
        return out

    def decode(self, checksum):
        "decode checksum string back into raw digest bytes"
        if len(checksum) != self.checksum_size:
            raise ValueError("%s checksum must be %d chars, not %d" %
                             (self.name, self.checksum_size, len(checksum)))
        return h64.decode_transposed_bytes(checksum, self.offsets)

    def checksum(self, secret, salt, rounds):
        "run the digest construction and return the encoded checksum"
        return self.encode(self.raw(secret, salt, rounds))

    def __repr__(self):
        return "<ShaCryptVariant %s ident=%r>" % (self.name, self.ident)

#: map of ident -> variant
VARIANTS = dict((v.ident, v) for v in [
    ShaCryptVariant(SHA256_IDENT, "sha256_crypt", sha256, 43, _256_groups),
    ShaCryptVariant(SHA512_IDENT, "sha512_crypt", sha512, 86, _512_groups),
])

def get_variant(ident):
    """lookup variant by identifier

    :raises shacrypt.exc.UnsupportedAlgorithmError: if ident isn't known
    """
    try:
        return VARIANTS[ident]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmError(ident)

#=========================================================
#eof
#=========================================================
