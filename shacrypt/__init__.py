"""shacrypt - sha256-crypt & sha512-crypt password hashing"""

__version__ = "1.0"

#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
from shacrypt.codec import identify as _identify_prefix
from shacrypt.crypt import CryptHash
from shacrypt.exc import MalformedHashError, InvalidSaltError, \
    UnsupportedAlgorithmError, SecureRandomUnavailable
from shacrypt.handlers.sha2_crypt import SHA256_IDENT, SHA512_IDENT, VARIANTS
from shacrypt.rng import SaltSource, set_strict_random
#local
__all__ = [
    #value object
    "CryptHash",
    "SaltSource",
    "set_strict_random",

    #quickstart
    "encrypt",
    "verify",
    "identify",

    #idents
    "SHA256_IDENT",
    "SHA512_IDENT",

    #errors
    "MalformedHashError",
    "InvalidSaltError",
    "UnsupportedAlgorithmError",
    "SecureRandomUnavailable",
]

#=========================================================
#quickstart interface
#=========================================================
def identify(hash):
    """Identify algorithm which generated a password hash.

    :arg hash:
        The hash string to identify.

    :returns:
        ``"sha256_crypt"`` for ``$5$`` hashes, ``"sha512_crypt"`` for ``$6$``
        hashes, or ``None`` if the hash could not be identified.
    """
    if not _identify_prefix(hash):
        return None
    if isinstance(hash, bytes):
        hash = hash.decode("utf-8")
    return VARIANTS[hash.split("$", 2)[1]].name

def encrypt(secret, ident=SHA512_IDENT, **kwds):
    """Encrypt secret using sha256-crypt or sha512-crypt.

    :arg secret:
        String containing the secret to encrypt.

    :param ident:
        ``"6"`` for sha512-crypt (the default), ``"5"`` for sha256-crypt.

    All other keywords (``rounds``, ``salt``, ``salt_source``) are passed
    on to :meth:`CryptHash.encrypt`.

    :returns:
        The crypt string for the secret.
    """
    return CryptHash.encrypt(secret, ident=ident, **kwds).to_string()

def verify(secret, hash):
    """verify a secret against an existing crypt string.

    :arg secret:
        A string containing the secret to check.

    :arg hash:
        The crypt string to check against.

    :raises shacrypt.exc.MalformedHashError:
        if the hash can't be parsed.

    :returns:
        ``True`` if the secret matches, otherwise ``False``.
    """
    return CryptHash.from_string(hash).match(secret)

#=========================================================
#eof
#=========================================================
