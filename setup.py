"""shacrypt setup script"""
#=========================================================
#init script env - ensure cwd = root of source dir
#=========================================================
import os
root_dir = os.path.abspath(os.path.join(__file__,".."))
os.chdir(root_dir)

#=========================================================
#imports
#=========================================================
import re

from setuptools import setup

#=========================================================
#version string
#=========================================================
with open(os.path.join(root_dir, "shacrypt", "__init__.py")) as vh:
    VERSION = re.search(r'^__version__\s*=\s*"(.*?)"\s*$', vh.read(), re.M).group(1)

#=========================================================
#static text
#=========================================================
SUMMARY = "sha256-crypt & sha512-crypt password hashing"

DESCRIPTION = """\
shacrypt is a pure-python implementation of the SHA-crypt password
hashing algorithms (``$5$`` sha256-crypt and ``$6$`` sha512-crypt),
as found in /etc/shadow and glibc's crypt(3).

It hashes secrets into crypt strings, parses and re-renders existing
crypt strings, and verifies candidate secrets against them.
It also reads & writes ``{CRYPT}``-prefixed LDAP ``userPassword`` values.
"""

KEYWORDS = "password secret hash security crypt sha256-crypt sha512-crypt shadow ldap"

#=========================================================
#config setup
#=========================================================
config = dict(
    #package info
    packages = [
        "shacrypt",
            "shacrypt.handlers",
            "shacrypt.tests",
            "shacrypt.utils",
        ],
    zip_safe=True,
    python_requires=">=3.6",

    #metadata
    name = "shacrypt",
    version = VERSION,
    license = "BSD",

    description = SUMMARY,
    long_description = DESCRIPTION,
    keywords = KEYWORDS,
    classifiers = [
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries",
    ],

    extras_require = {
        "test": ["pytest"],
    },
)

#=========================================================
#build
#=========================================================
setup(**config)

#=========================================================
#EOF
#=========================================================
