"""shacrypt.ldap - sha-crypt hashes stored in LDAP ``userPassword`` attributes

LDAP servers (e.g. OpenLDAP) accept crypt strings in ``userPassword``
when prefixed with the ``{CRYPT}`` scheme marker, e.g.::

    {CRYPT}$6$saltstring$svn8UoSVapNtMuq1ukKS4tPQd8iKwSMHWjl/O817G3u...

reference - http://www.openldap.org/doc/admin24/security.html
"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
from shacrypt.crypt import CryptHash
from shacrypt.exc import MalformedHashError
from shacrypt.utils import to_native_str
#local
__all__ = [
    "LDAP_CRYPT_PREFIX",
    "is_ldap_crypt",
    "to_ldap",
    "from_ldap",
    "ldap_verify",
]

LDAP_CRYPT_PREFIX = "{CRYPT}"

def is_ldap_crypt(value):
    "check if *value* carries the ``{CRYPT}`` scheme prefix (case-insensitive)"
    if not value:
        return False
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return False
    if not isinstance(value, str):
        return False
    return value[:len(LDAP_CRYPT_PREFIX)].upper() == LDAP_CRYPT_PREFIX

def to_ldap(hash):
    "render :class:`CryptHash` (or crypt string) as ``{CRYPT}``-prefixed ldap value"
    if isinstance(hash, CryptHash):
        hash = hash.to_string()
    else:
        #validate before wrapping
        hash = CryptHash.from_string(hash).to_string()
    return LDAP_CRYPT_PREFIX + hash

def from_ldap(value):
    """parse ``{CRYPT}``-prefixed ldap value

    :raises shacrypt.exc.MalformedHashError:
        if the prefix is missing, or the crypt string is malformed
    """
    if not is_ldap_crypt(value):
        raise MalformedHashError("missing %s prefix" % (LDAP_CRYPT_PREFIX,))
    value = to_native_str(value, param="value")
    return CryptHash.from_string(value[len(LDAP_CRYPT_PREFIX):])

def ldap_verify(secret, value):
    "verify secret against ``{CRYPT}``-prefixed ldap value"
    return from_ldap(value).match(secret)

#=========================================================
#eof
#=========================================================
