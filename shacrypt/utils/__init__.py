"""shacrypt utility functions"""
#=================================================================================
#imports
#=================================================================================
#core
from hmac import compare_digest
import logging; log = logging.getLogger(__name__)
import os
#pkg
from shacrypt.exc import ExpectedStringError
#local
__all__ = [
    #constants
    "HASH64_CHARS",

    #bytes<->str
    "to_bytes",
    "to_native_str",

    #string manipulation
    "consteq",

    #byte manipulation
    "repeat_to_length",

    #config
    "env_flag",
]

#=================================================================================
#constants
#=================================================================================

#: hash64 char sequence, used both for salts and checksums
HASH64_CHARS = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("", "0", "false", "no", "off")

#=================================================================================
#bytes <-> str
#=================================================================================
def to_bytes(source, encoding="utf-8", param="value"):
    """helper to normalize input to bytes

    :arg source: source str or bytes
    :param encoding: encoding used to convert str input
    :param param: name of parameter, used in error messages

    :raises TypeError: if source is not str or bytes
    """
    if isinstance(source, bytes):
        return source
    elif isinstance(source, str):
        return source.encode(encoding)
    else:
        raise ExpectedStringError(source, param)

def to_native_str(source, encoding="utf-8", param="value"):
    """helper to normalize input to str

    :raises TypeError: if source is not str or bytes
    :raises UnicodeDecodeError: if bytes input isn't valid in *encoding*
    """
    if isinstance(source, str):
        return source
    elif isinstance(source, bytes):
        return source.decode(encoding)
    else:
        raise ExpectedStringError(source, param)

#=================================================================================
#string helpers
#=================================================================================
def consteq(left, right):
    """check two strings/bytes for equality without leaking where they differ
    (wraps :func:`hmac.compare_digest`).

    str inputs are compared as their utf-8 encoding.
    """
    if isinstance(left, str) and isinstance(right, str):
        left = left.encode("utf-8")
        right = right.encode("utf-8")
    elif not (isinstance(left, bytes) and isinstance(right, bytes)):
        raise TypeError("inputs must be both str or bytes")
    return compare_digest(left, right)

#=================================================================================
#byte manipulation
#=================================================================================
def repeat_to_length(source, size):
    """repeat *source* as many whole times as fit in *size*, then pad with
    a prefix of *source* to make the result exactly *size* long.
    """
    m, d = divmod(size, len(source))
    if d:
        return source * m + source[:d]
    else:
        return source * m

#=================================================================================
#config
#=================================================================================
def env_flag(name, default=False):
    """read boolean flag from environment variable *name*.

    recognizes ``1 / true / yes / on`` and ``0 / false / no / off``
    (case-insensitive); anything else is logged and treated as *default*.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    log.warning("ignoring unrecognized value for $%s: %r", name, value)
    return default

#=================================================================================
#eof
#=================================================================================
