"""shacrypt.exc -- exceptions & warnings raised by shacrypt"""
#==========================================================================
# exceptions
#==========================================================================
class MalformedHashError(ValueError):
    """Error raised if a crypt string could not be parsed.

    This covers every way a ``$id$[rounds=N$]salt$hash`` string can be
    wrong: bad field count, unknown identifier, a malformed or out-of-range
    ``rounds=`` field, an overlong salt, or an empty checksum.
    No partial result is ever returned alongside this error.
    """
    def __init__(self, reason=None, hash_name=None):
        text = "malformed %s hash" % (hash_name or "sha-crypt")
        if reason:
            text = "%s (%s)" % (text, reason)
        ValueError.__init__(self, text)
        self.reason = reason

class InvalidSaltError(ValueError):
    """Error raised if a caller-supplied salt contains the ``$`` separator,
    or is given as bytes which aren't valid utf-8.

    Such a salt would produce a crypt string which can't be parsed back,
    so it's rejected outright rather than stripped.
    """
    def __init__(self, reason="salt may not contain '$' characters"):
        ValueError.__init__(self, reason)

class UnsupportedAlgorithmError(ValueError):
    """Error raised when hashing or verifying with an unknown algorithm identifier.

    :meth:`CryptHash.match() <shacrypt.crypt.CryptHash.match>` raises this
    instead of reporting a mismatch.
    """
    def __init__(self, ident):
        ValueError.__init__(self, "unsupported crypt algorithm: %r" % (ident,))
        self.ident = ident

class SecureRandomUnavailable(RuntimeError):
    """Error raised if no cryptographically secure entropy source exists,
    and shacrypt has been configured not to fall back to a weaker one.

    :exc:`!SecureRandomUnavailable` derives from :exc:`RuntimeError`,
    since this indicates a missing OS feature (:func:`os.urandom`).
    See :func:`shacrypt.rng.set_strict_random`.
    """

#==========================================================================
# warnings
#==========================================================================
class ShaCryptWarning(UserWarning):
    """base class for shacrypt's user warnings"""

class ShaCryptSecurityWarning(ShaCryptWarning):
    """Warning issued when shacrypt has to fall back to a non-cryptographic
    random number generator for salts.
    """

#==========================================================================
# error constructors
#==========================================================================
def type_name(value):
    "return pretty-printed string containing name of value's type"
    cls = value.__class__
    if cls.__module__ and cls.__module__ not in ["__builtin__", "builtins"]:
        return "%s.%s" % (cls.__module__, cls.__name__)
    elif value is None:
        return 'None'
    else:
        return cls.__name__

def ExpectedStringError(value, param):
    "error message when param was supposed to be str or bytes"
    # NOTE: value is never displayed, since it may be a password.
    return TypeError("%s must be str or bytes, not %s" % (param, type_name(value)))

#==========================================================================
# eof
#==========================================================================
