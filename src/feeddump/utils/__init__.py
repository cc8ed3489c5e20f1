"""feeddump utilities.

Fingerprinting helpers shared by the normalizer and the sync engine.
"""

from feeddump.utils.keys import designated_field, fingerprint

__all__ = [
    "designated_field",
    "fingerprint",
]
