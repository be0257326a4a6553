import importlib.metadata
import os
from typing import Optional

try:
    VERSION = importlib.metadata.version("calcparser")
except importlib.metadata.PackageNotFoundError:
    # running from a source checkout
    VERSION = "0.0.0"

# Parser limits
MAX_NESTING_DEPTH = int(os.getenv("CALCPARSER_MAX_NESTING_DEPTH", "100"))  # nested primaries: ( ), calls, unary ops
MAX_NAME_LENGTH = int(os.getenv("CALCPARSER_MAX_NAME_LENGTH", "255"))  # characters in a variable/function name

# Built-in functions
ENABLE_ROLL = os.getenv("CALCPARSER_ENABLE_ROLL", "true").lower() == "true"
POW_MULTIPLY_LIMIT = int(os.getenv("CALCPARSER_POW_MULTIPLY_LIMIT", "64"))  # pow(a, n) multiplies for 1 <= n <= this
MAX_ROLL_COUNT = int(os.getenv("CALCPARSER_MAX_ROLL_COUNT", "10000"))  # roll(n, d) rejects n above this

_seed = os.getenv("CALCPARSER_RANDOM_SEED")
RANDOM_SEED: Optional[int] = int(_seed) if _seed else None

# Error reporting
ERROR_PREFIX = os.getenv("CALCPARSER_ERROR_PREFIX", "Error! ")

# Logging
LOG_LEVEL = os.getenv("CALCPARSER_LOG_LEVEL", "WARNING")
LOG_FILE: Optional[str] = os.getenv("CALCPARSER_LOG_FILE") or None
