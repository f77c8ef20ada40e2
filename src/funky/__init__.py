"""
funky - Maybe and Trial containers for composable absence and failure.

- funky.core.maybe: a value that may be absent (Present / Absent)
- funky.core.trial: an outcome that may fail with reasons (Success / Failure / Failures)
- funky.core.bridge: conversions between the two
"""

__version__ = "0.1.0"

# Re-export everything from the actual implementation
from funky.core import *  # noqa
