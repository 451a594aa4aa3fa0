"""shacrypt.rng - salt generation & the process-wide entropy source

the default entropy source is chosen lazily, the first time a salt is
needed: :class:`random.SystemRandom` if :func:`os.urandom` works on this
host, otherwise a seeded :class:`random.Random`. that choice is made once
(under a lock) and shared for the lifetime of the process.

whether the weaker fallback may actually be *used* is governed by the
"strict random" flag: if strict, salt generation raises
:exc:`~shacrypt.exc.SecureRandomUnavailable` instead. the flag defaults to
the ``SHACRYPT_STRICT_RANDOM`` environment variable, and can be changed via
:func:`set_strict_random`, or per :class:`SaltSource` instance.
"""
#=================================================================================
#imports
#=================================================================================
#core
from hashlib import sha256
import logging; log = logging.getLogger(__name__)
import os
import random
import threading
import time
from warnings import warn
#pkg
from shacrypt.exc import SecureRandomUnavailable, ShaCryptSecurityWarning
from shacrypt.utils import HASH64_CHARS, env_flag
#local
__all__ = [
    #salt source
    "SaltSource",
    "default_salt_source",

    #default entropy source
    "get_default_rng",
    "set_strict_random",
    "get_strict_random",

    #helpers
    "StreamRandom",
    "getrandstr",
    "genseed",
]

#: number of salt chars generated when none are requested explicitly
DEFAULT_SALT_SIZE = 16

#=================================================================================
#rng classes
#=================================================================================
class StreamRandom(random.Random):
    """Random subclass which pulls all its data from a ``count -> bytes`` callable
    (e.g. :func:`os.urandom`, or a deterministic stub in unittests)."""

    def __init__(self, getrandbytes):
        self._getrandbytes = getrandbytes
        super(StreamRandom, self).__init__()

    def seed(self, *args, **kwds):
        "stream sources have no seed; this is a no-op"
        return None

    def random(self):
        "get the next random number in the range [0.0, 1.0)"
        return (int.from_bytes(self._getrandbytes(7), "big") >> 3) * 2.0**-53

    def getrandbits(self, k):
        "generate an int with *k* random bits"
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        count = (k + 7) // 8
        value = int.from_bytes(self._getrandbytes(count), "big")
        return value >> (count * 8 - k)

    def _notimplemented(self, *args, **kwds):
        raise NotImplementedError('%s entropy source does not have state.' % (self.__class__.__name__,))
    getstate = setstate = _notimplemented

class LockedRandom(random.Random):
    "random.Random subclass whose draws are serialized under a lock"

    def __init__(self, x=None):
        self._lock = threading.Lock()
        super(LockedRandom, self).__init__(x)

    def randrange(self, *args, **kwds):
        with self._lock:
            return super(LockedRandom, self).randrange(*args, **kwds)

def _coerce_rng(source):
    "normalize *source* into an object providing ``randrange()``"
    if hasattr(source, "randrange"):
        return source
    if callable(source):
        return StreamRandom(source)
    raise TypeError("unknown random source type: %r" % (source,))

#=================================================================================
#process-wide entropy source
#=================================================================================
_strict_random = env_flag("SHACRYPT_STRICT_RANDOM")

_default_lock = threading.Lock()

# (rng, is_secure) tuple; None until first use
_default_entry = None

def has_urandom():
    "check if os.urandom() is supported on this host"
    try:
        os.urandom(1)
    except NotImplementedError:
        return False
    return True

def genseed(value=None):
    "generate prng seed value from system resources"
    #if value is rng, extract a bunch of bits from it's state
    if hasattr(value, "getrandbits"):
        value = value.getrandbits(256)
    text = "%s %s %s %.15f" % (
        value,
            #if caller specified a seed value, mix it in

        os.getpid() if hasattr(os, "getpid") else None,
            #add current process id

        id(object()),
            #id of a freshly created object.

        time.time(),
            #the current time, to whatever precision os uses
        )
    #hash it all up and return it as int
    return int(sha256(text.encode("utf-8")).hexdigest(), 16)

def _select_default_rng():
    "pick the process-wide entropy source; returns ``(rng, is_secure)``"
    if has_urandom():
        log.debug("salt entropy source: random.SystemRandom")
        return random.SystemRandom(), True
    log.warning("os.urandom() not available, salt entropy source "
                "falls back to seeded random.Random")
    return LockedRandom(genseed()), False

def _get_default_entry():
    global _default_entry
    entry = _default_entry
    if entry is None:
        with _default_lock:
            entry = _default_entry
            if entry is None:
                entry = _default_entry = _select_default_rng()
    return entry

def get_default_rng(strict=None):
    """return the process-wide entropy source, selecting it on first call.

    :param strict:
        override the global strict-random flag for this call.

    :raises shacrypt.exc.SecureRandomUnavailable:
        if only the non-cryptographic fallback is available
        and strict mode is in effect.
    """
    if strict is None:
        strict = _strict_random
    rng, secure = _get_default_entry()
    if not secure:
        if strict:
            raise SecureRandomUnavailable("no cryptographically secure random "
                                          "source available for salt generation")
        warn("no cryptographically secure random source available, "
             "salts are generated with a predictable prng",
             ShaCryptSecurityWarning)
    return rng

def set_strict_random(flag):
    """set the global strict-random flag.

    when ``True``, salt generation fails with
    :exc:`~shacrypt.exc.SecureRandomUnavailable` rather than use a
    non-cryptographic prng. defaults to ``False``, or to the
    ``SHACRYPT_STRICT_RANDOM`` environment variable if set.
    """
    global _strict_random
    _strict_random = bool(flag)
    log.debug("strict random flag set to %r", _strict_random)

def get_strict_random():
    "return current value of the global strict-random flag"
    return _strict_random

def reset_default_rng():
    "forget the selected process-wide entropy source (used by unittests)"
    global _default_entry
    with _default_lock:
        _default_entry = None

#=================================================================================
#random string helpers
#=================================================================================
def getrandstr(rng, charset, count):
    """return string containing *count* number of chars, whose elements are drawn from specified charset, using specified rng"""
    #check alphabet & count
    if count < 0:
        raise ValueError("count must be >= 0")
    letters = len(charset)
    if letters == 0:
        raise ValueError("alphabet must not be empty")
    if letters == 1:
        return charset * count

    #draw one big value, then split it into base-<letters> digits
    value = rng.randrange(0, letters**count)
    out = []
    i = 0
    while i < count:
        out.append(charset[value % letters])
        value //= letters
        i += 1
    return "".join(out)

#=================================================================================
#salt source
#=================================================================================
class SaltSource(object):
    """generates salts drawn uniformly from the hash64 alphabet.

    :param rng:
        optional entropy provider. may be a :class:`random.Random`-like
        object (anything with ``randrange()``), or a callable which takes
        a byte count and returns that many random bytes
        (e.g. :func:`os.urandom`). if omitted, the process-wide default
        source is used (see :func:`get_default_rng`).

    :param strict:
        optional override of the global strict-random flag. only affects
        instances using the default source; an explicitly passed *rng*
        is always trusted.
    """

    def __init__(self, rng=None, strict=None):
        self._rng = None if rng is None else _coerce_rng(rng)
        self.strict = strict

    @property
    def rng(self):
        "the entropy provider this instance draws from"
        if self._rng is not None:
            return self._rng
        return get_default_rng(self.strict)

    def generate(self, length=DEFAULT_SALT_SIZE):
        "return salt string of *length* chars drawn from ``./0-9A-Za-z``"
        return getrandstr(self.rng, HASH64_CHARS, length)

    def __repr__(self):
        if self._rng is None:
            return "<SaltSource default strict=%r>" % (self.strict,)
        return "<SaltSource rng=%r>" % (self._rng,)

#: salt source used when callers don't provide one
default_salt_source = SaltSource()

#=================================================================================
#eof
#=================================================================================
