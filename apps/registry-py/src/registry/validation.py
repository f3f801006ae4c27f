"""Field validation rules for user records."""

import re

# Hangul Jamo, Compatibility Jamo, Jamo Extended-A, Syllables and Jamo Extended-B
_HANGUL_PATTERN = re.compile("[\u1100-\u11ff\u3130-\u318f\ua960-\ua97f\uac00-\ud7af\ud7b0-\ud7ff]")


def is_valid_name(name: str) -> bool:
    """Return False if the name contains any Hangul character.

    Empty names are accepted here; callers reject them as missing fields.
    """
    return _HANGUL_PATTERN.search(name) is None


def is_valid_email(email: str) -> bool:
    """Return True if the email contains an ``@``.

    This is deliberately permissive and does not attempt RFC 5322 validation.
    """
    return "@" in email
