"""
Fixed values of the license token format.
"""

# Issuer carried by every license token
ISSUER = "licensegate"

# Header field carrying the token format version
VERSION_HEADER = "lgv"
TOKEN_VERSION = 1
SUPPORTED_VERSIONS = (1,)

# Single supported signature scheme
ALGORITHM = "EdDSA"
TOKEN_TYPE = "JWT"
SIGNATURE_LENGTH = 64
PUBLIC_KEY_LENGTH = 32

# Seconds
DEFAULT_CLOCK_SKEW = 60
EXPIRING_SOON_THRESHOLD = 7 * 24 * 60 * 60
