"""helpers for shacrypt unittests"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
import os
import unittest
import warnings
#pkg
from shacrypt.crypt import CryptHash
from shacrypt.exc import MalformedHashError
from shacrypt.handlers.sha2_crypt import get_variant
from shacrypt.utils import HASH64_CHARS
import shacrypt
#local
__all__ = [
    #util funcs
    'enable_option',
    'classproperty',

    #unit testing
    'TestCase',
    '_CryptHashTestCase',
]

#=========================================================
#option flags
#=========================================================
DEFAULT_TESTS = ""

tests = set(
    v.strip()
    for v
    in os.environ.get("SHACRYPT_TESTS", DEFAULT_TESTS).lower().split(",")
    )

def enable_option(*names):
    """check if a given test should be included based on the env var.

    test flags:
        slow            run tests which take hours (e.g. 999999999 rounds)
        all             run all tests
    """
    return 'all' in tests or any(name in tests for name in names)

#=========================================================
#misc helpers
#=========================================================
class classproperty(object):
    """Function decorator which acts like a combination of classmethod+property (limited to read-only properties)"""

    def __init__(self, func):
        self.im_func = func

    def __get__(self, obj, cls):
        return self.im_func(cls)

#=========================================================
#custom test base
#=========================================================
class TestCase(unittest.TestCase):
    """shacrypt-specific test case class

    this class adds a number of features to the standard TestCase...
    * common prefix for all test descriptions
    * resets warnings filter & registry for every test
    * skips classes whose names start with "_" (base classes)
    """
    #----------------------------------------------------------------
    # make it easy for test cases to add common prefix to shortDescription
    #----------------------------------------------------------------

    # string prepended to all tests in TestCase
    descriptionPrefix = None

    def shortDescription(self):
        "wrap shortDescription() method to prepend descriptionPrefix"
        desc = super(TestCase, self).shortDescription()
        prefix = self.descriptionPrefix
        if prefix:
            desc = "%s: %s" % (prefix, desc or str(self))
        return desc

    #----------------------------------------------------------------
    # skip subclasses whose names start with "_"
    #----------------------------------------------------------------
    @classproperty
    def __unittest_skip__(cls):
        return cls.__name__.startswith("_")

    #----------------------------------------------------------------
    # reset warning filters & registry before each test
    #----------------------------------------------------------------

    # flag to enable this feature
    resetWarningState = True

    def setUp(self):
        super(TestCase, self).setUp()
        self.setUpWarnings()

    def setUpWarnings(self):
        if self.resetWarningState:
            ctx = warnings.catch_warnings()
            ctx.__enter__()
            self.addCleanup(ctx.__exit__, None, None, None)
            warnings.resetwarnings()
            warnings.simplefilter("always")

#=========================================================
#crypt hash test helper
#=========================================================
class _CryptHashTestCase(TestCase):
    """base class for testing one sha-crypt variant.

    subclasses fill in :attr:`ident` and the known_xxx tables,
    and get the standard identify / parse / verify / encrypt checks.
    """
    #=========================================================
    #attrs to be filled in by subclass
    #=========================================================

    # ident of variant being tested
    ident = None

    # list of (secret, hash) pairs which should verify as matching
    known_correct = []

    # list of (secret, hash) pairs which should verify as NOT matching
    known_incorrect = []

    # list of hashes for this variant which should be rejected by the parser
    known_malformed = []

    # list of (name, hash) pairs for other algorithms' hashes
    known_other = [
        ('md5_crypt', '$1$dOHYPKoP$tnxS1T8Q6VVn3kpV8cN6o.'),
        ('bcrypt', '$2a$12$EXRkfkdmXn2gzds2SSitu.MW9.gAVqa9eLS1//RYtYCmB1eLHg.9q'),
        ('des_crypt', '6f8c114b58f2c'),
    ]

    # list of various secrets all variants are tested with
    standard_secrets = [
        '',
        ' ',
        'my socrates note',
        'Compl3X AlphaNu3meric',
        '4lpHa N|_|M3r1K W/ Cur51|\\|g: #$%(*)(*%#',
        'test with unicÖde',
        b'\xffraw bytes\x00',
        ]

    @property
    def descriptionPrefix(self):
        if self.ident is None:
            return None
        return get_variant(self.ident).name

    @property
    def variant(self):
        return get_variant(self.ident)

    #=========================================================
    #identify
    #=========================================================
    def test_10_identify_positive(self):
        "test identify() against known-correct hashes"
        for secret, hash in self.known_correct:
            self.assertEqual(shacrypt.identify(hash), self.variant.name)
        for secret, hash in self.known_incorrect:
            self.assertEqual(shacrypt.identify(hash), self.variant.name)

    def test_11_identify_other(self):
        "test identify() against other algorithms' hashes"
        for name, hash in self.known_other:
            self.assertIs(shacrypt.identify(hash), None, "hash=%r:" % (hash,))

    #=========================================================
    #parsing
    #=========================================================
    def test_20_parse_positive(self):
        "test from_string() round-trips known-correct hashes"
        for secret, hash in self.known_correct:
            result = CryptHash.from_string(hash)
            self.assertEqual(result.ident, self.ident)
            self.assertEqual(result.to_string(), hash)
            self.assertEqual(len(result.checksum), self.variant.checksum_size)

    def test_21_parse_malformed(self):
        "test from_string() rejects known-malformed hashes"
        for hash in self.known_malformed:
            self.assertRaises(MalformedHashError, CryptHash.from_string, hash)

    def test_22_parse_other(self):
        "test from_string() rejects other algorithms' hashes"
        for name, hash in self.known_other:
            self.assertRaises(MalformedHashError, CryptHash.from_string, hash)

    #=========================================================
    #verify
    #=========================================================
    def test_30_verify_positive(self):
        "test verify() against known-correct secret/hash pairs"
        for secret, hash in self.known_correct:
            self.assertTrue(shacrypt.verify(secret, hash),
                            "known correct hash (secret=%r, hash=%r):" % (secret, hash))

    def test_31_verify_negative(self):
        "test verify() against known-incorrect secret/hash pairs"
        for secret, hash in self.known_incorrect:
            self.assertFalse(shacrypt.verify(secret, hash))

    def test_32_verify_derived_negative(self):
        "test verify() against near-miss secrets"
        for secret, hash in self.known_correct:
            self.assertFalse(shacrypt.verify(secret + 'x', hash))
            self.assertFalse(shacrypt.verify('!' + secret, hash))

    def test_33_verify_malformed(self):
        "test verify() throws error against known-malformed hashes"
        for hash in self.known_malformed:
            self.assertRaises(MalformedHashError, shacrypt.verify, 'stub', hash)

    #=========================================================
    #encrypt
    #=========================================================
    def test_40_encrypt_standard(self):
        "test encrypt() against standard secrets"
        for secret in self.standard_secrets:
            self.check_encrypt(secret)

    def check_encrypt(self, secret):
        "check encrypt() behavior for a given secret"
        result = CryptHash.encrypt(secret, ident=self.ident)
        hash = result.to_string()

        self.assertEqual(shacrypt.identify(hash), self.variant.name)
        self.assertEqual(len(result.checksum), self.variant.checksum_size)
        self.assertTrue(all(c in HASH64_CHARS for c in result.checksum))
        self.assertNotIn("rounds=", hash)

        #parse round trip
        self.assertEqual(CryptHash.from_string(hash), result)

        #positive & negative verification
        self.assertTrue(result.match(secret), "verify hash %r from secret %r:" % (hash, secret))
        other = secret + (b'x' if isinstance(secret, bytes) else 'x')
        self.assertFalse(result.match(other), "hash collision: %r and %r => %r" % (secret, other, hash))

    def test_41_encrypt_gensalt(self):
        "test encrypt() generates new salt each time"
        a = CryptHash.encrypt("test", ident=self.ident)
        b = CryptHash.encrypt("test", ident=self.ident)
        self.assertEqual(len(a.salt), 16)
        self.assertNotEqual(a.salt, b.salt)
        self.assertNotEqual(a, b)

    def test_42_encrypt_known(self):
        "test encrypt() reproduces known-correct hashes from their settings"
        for secret, hash in self.known_correct:
            info = CryptHash.from_string(hash)
            rounds = None if info.implicit_rounds else info.rounds
            result = CryptHash.encrypt(secret, ident=self.ident, salt=info.salt, rounds=rounds)
            self.assertEqual(result.to_string(), hash, "secret=%r:" % (secret,))

    def test_43_digest(self):
        "test digest attribute decodes the checksum"
        for secret, hash in self.known_correct:
            info = CryptHash.from_string(hash)
            raw = info.digest
            self.assertEqual(len(raw), self.variant.digest_size)
            self.assertEqual(self.variant.encode(raw), info.checksum)

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#EOF
#=========================================================
