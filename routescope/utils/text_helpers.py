# routescope/utils/text_helpers.py
"""
Text utilities used by the recomputation scheduler.

 - compute_fingerprint(): content hash used to detect document changes
"""

import hashlib


def compute_fingerprint(text: str) -> str:
    """
    Return a deterministic digest of `text`.
    Identical text always yields the same fingerprint.
    """
    return hashlib.sha1(text.encode("utf-8", errors="surrogatepass")).hexdigest()
