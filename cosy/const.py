"""
Application constants and defaults.
"""

# Application info
APP_NAME = "COSY"
APP_VERSION = "0.1.0"

# Directive keys consumed by include resolution
EXTENDS_KEY = "extends"
INCLUDE_KEY = "include"
RESERVED_KEYS = (EXTENDS_KEY, INCLUDE_KEY)

# Maximum nesting of extends/include hops
MAX_INCLUDE_DEPTH = 10

# Maximum edit distance for "did you mean" hints
SUGGESTION_MAX_DISTANCE = 2

# Serializer defaults
DEFAULT_INDENT_SIZE = 4

# Environment variable overriding the CLI default log level
ENV_COSY_LOG_LEVEL = "COSY_LOG_LEVEL"

# Signed 64-bit integer range
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
