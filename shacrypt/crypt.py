"""shacrypt.crypt - the CryptHash value object"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
from shacrypt import codec
from shacrypt.exc import InvalidSaltError
from shacrypt.handlers.sha2_crypt import get_variant, SHA256_IDENT, SHA512_IDENT, \
    DEFAULT_ROUNDS, MIN_ROUNDS, MAX_ROUNDS, MAX_SALT_SIZE
from shacrypt.rng import default_salt_source
from shacrypt.utils import consteq, to_bytes, to_native_str
#local
__all__ = [
    "CryptHash",
    "norm_rounds",
    "norm_salt",
]

#=========================================================
#helpers
#=========================================================
def norm_rounds(rounds):
    """clamp explicitly requested rounds into ``[1000, 999999999]``

    out-of-range values are clamped silently (logged at debug level),
    unlike :func:`shacrypt.codec.parse`, which rejects them.

    :raises TypeError: if rounds isn't an integer
    """
    if not isinstance(rounds, int) or isinstance(rounds, bool):
        raise TypeError("rounds must be an integer")
    if rounds < MIN_ROUNDS:
        log.debug("rounds too low, clamping %d -> %d", rounds, MIN_ROUNDS)
        return MIN_ROUNDS
    if rounds > MAX_ROUNDS:
        log.debug("rounds too high, clamping %d -> %d", rounds, MAX_ROUNDS)
        return MAX_ROUNDS
    return rounds

def norm_salt(salt):
    """validate caller-supplied salt & truncate it to 16 bytes

    :arg salt: salt as str or bytes (bytes must be utf-8)

    :raises shacrypt.exc.InvalidSaltError:
        if the salt contains ``$``, or is bytes which aren't utf-8

    :returns: ``(salt_str, salt_bytes)`` tuple
    """
    try:
        salt = to_native_str(salt, param="salt")
    except UnicodeDecodeError:
        raise InvalidSaltError("salt bytes must be valid utf-8")
    if "$" in salt:
        raise InvalidSaltError()
    raw = salt.encode("utf-8")
    if len(raw) > MAX_SALT_SIZE:
        #NOTE: a multibyte char split by the cut is dropped, not mangled
        salt = raw[:MAX_SALT_SIZE].decode("utf-8", "ignore")
        raw = salt.encode("utf-8")
    return salt, raw

#=========================================================
#value object
#=========================================================
class CryptHash(object):
    """An immutable sha256-crypt / sha512-crypt hash.

    Instances are obtained by hashing a password (:meth:`encrypt`,
    :meth:`sha256`, :meth:`sha512`), or by parsing a crypt string
    (:meth:`from_string`). The crypt string is returned by :meth:`to_string`
    (or ``str()``), and a candidate password is checked with :meth:`match`.

    Two instances are equal if they have the same ident, salt, checksum and
    effective number of rounds; whether rounds were given explicitly
    doesn't matter.

    :param ident: algorithm identifier, ``"5"`` or ``"6"``
    :param salt: salt string
    :param checksum: encoded hash string
    :param rounds:
        number of rounds, or ``None`` if the default of 5000 is used
        and omitted from the crypt string.

    The components are stored as given; use :meth:`from_string` to get
    validation.
    """
    __slots__ = ("_ident", "_rounds", "_implicit_rounds", "_salt", "_checksum")

    #=========================================================
    #init
    #=========================================================
    def __init__(self, ident, salt, checksum, rounds=None):
        self._ident = ident
        self._salt = salt
        self._checksum = checksum
        if rounds is None:
            self._rounds = DEFAULT_ROUNDS
            self._implicit_rounds = True
        else:
            self._rounds = rounds
            self._implicit_rounds = False

    @classmethod
    def encrypt(cls, secret, ident=SHA512_IDENT, rounds=None, salt=None,
                salt_source=None):
        """hash *secret* using the sha-crypt algorithm

        :arg secret: password, as str (encoded to utf-8) or bytes
        :param ident: ``"5"`` for sha256-crypt, ``"6"`` for sha512-crypt
        :param rounds:
            number of rounds. if omitted, 5000 is used and the rounds
            field is left out of the crypt string. explicit values are
            clamped to ``[1000, 999999999]``.
        :param salt:
            salt to use. truncated to 16 bytes; must not contain ``$``.
            if omitted, a random 16 char salt is generated.
        :param salt_source:
            :class:`~shacrypt.rng.SaltSource` used when *salt* is omitted.

        :raises shacrypt.exc.InvalidSaltError: if salt contains ``$``
        :raises shacrypt.exc.UnsupportedAlgorithmError: for an unknown ident
        :raises shacrypt.exc.SecureRandomUnavailable:
            if a salt must be generated, no secure rng exists,
            and strict random mode is enabled.
        """
        variant = get_variant(ident)
        secret = to_bytes(secret, param="secret")

        if rounds is None:
            effective_rounds = DEFAULT_ROUNDS
        else:
            rounds = effective_rounds = norm_rounds(rounds)

        if salt is None:
            salt = (salt_source or default_salt_source).generate()
        salt, raw_salt = norm_salt(salt)

        checksum = variant.checksum(secret, raw_salt, effective_rounds)
        return cls(ident, salt, checksum, rounds)

    @classmethod
    def sha256(cls, secret, **kwds):
        "hash *secret* using sha256-crypt; see :meth:`encrypt` for options"
        return cls.encrypt(secret, ident=SHA256_IDENT, **kwds)

    @classmethod
    def sha512(cls, secret, **kwds):
        "hash *secret* using sha512-crypt; see :meth:`encrypt` for options"
        return cls.encrypt(secret, ident=SHA512_IDENT, **kwds)

    @classmethod
    def from_string(cls, hash):
        """parse crypt string into :class:`CryptHash` instance

        :raises shacrypt.exc.MalformedHashError: if the string is malformed
        """
        info = codec.parse(hash)
        return cls(info.ident, info.salt, info.checksum, info.rounds)

    #=========================================================
    #attributes
    #=========================================================
    @property
    def ident(self):
        "algorithm identifier (``'5'`` or ``'6'``)"
        return self._ident

    @property
    def rounds(self):
        "effective number of rounds"
        return self._rounds

    @property
    def implicit_rounds(self):
        "True if rounds weren't requested explicitly, and are omitted from the crypt string"
        return self._implicit_rounds

    @property
    def salt(self):
        return self._salt

    @property
    def checksum(self):
        "the encoded hash"
        return self._checksum

    @property
    def name(self):
        "name of the algorithm variant (``sha256_crypt`` or ``sha512_crypt``)"
        return get_variant(self._ident).name

    @property
    def digest(self):
        "checksum decoded into raw digest bytes"
        return codec.decode_checksum(self._checksum, self._ident)

    #=========================================================
    #serialization
    #=========================================================
    def to_string(self):
        "render crypt string, e.g. ``$5$saltstring$5B8vYYiY...``"
        rounds = None if self._implicit_rounds else self._rounds
        return codec.render(self._ident, self._salt, self._checksum, rounds)

    __str__ = to_string

    def __repr__(self):
        return "<CryptHash %s>" % (self.to_string(),)

    #=========================================================
    #verification
    #=========================================================
    def match(self, secret):
        """check if *secret* hashes to this value

        re-runs the full hash with this instance's ident, salt & rounds.

        :raises shacrypt.exc.UnsupportedAlgorithmError:
            if this instance's ident isn't a known algorithm
        """
        other = self.encrypt(secret, ident=self._ident,
                             rounds=None if self._implicit_rounds else self._rounds,
                             salt=self._salt)
        return (self._key()[:3] == other._key()[:3] and
                consteq(other._checksum, self._checksum))

    #=========================================================
    #comparison
    #=========================================================
    def _key(self):
        return (self._ident, self._rounds, self._salt, self._checksum)

    def __eq__(self, other):
        if not isinstance(other, CryptHash):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#eof
#=========================================================
