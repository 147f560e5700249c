"""User Input Enforcement — pure checks on path identifiers and DTO contents.

Invariants:
    - parse_user_id accepts the canonical, hex-only, braced and urn:uuid: forms
    - Apart from the hyphens, every character must be an ASCII hex digit
    - Wrong length is reported with the offending length, e.g. "invalid UUID length: 7"
    - find_missing_field is PURE: reports the first empty field in wire order,
      never raises, never touches storage
    - Required fields are checked for presence and non-emptiness only (no date format)
"""

import string
from uuid import UUID

from user_service.core.errors import InvalidUserIdError


_CANONICAL_LENGTH = 36
_HYPHEN_POSITIONS = (8, 13, 18, 23)
_URN_PREFIX = "urn:uuid:"
_UUID_LENGTHS = frozenset({32, _CANONICAL_LENGTH, _CANONICAL_LENGTH + 2, _CANONICAL_LENGTH + 9})
_HEX_DIGITS = frozenset(string.hexdigits)

# (attribute, wire name) in the order validation reports them
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("birthday", "birthday"),
)


def parse_user_id(raw: str) -> UUID:
    """Parse a path identifier or raise InvalidUserIdError."""
    if len(raw) not in _UUID_LENGTHS:
        raise InvalidUserIdError(f"invalid UUID length: {len(raw)}")

    body = raw
    if len(raw) == _CANONICAL_LENGTH + 9:
        if raw[:len(_URN_PREFIX)].lower() != _URN_PREFIX:
            raise InvalidUserIdError(f"invalid urn prefix: {raw[:len(_URN_PREFIX)]!r}")
        body = raw[len(_URN_PREFIX):]
    elif len(raw) == _CANONICAL_LENGTH + 2:
        if raw[0] != "{" or raw[-1] != "}":
            raise InvalidUserIdError("invalid UUID format")
        body = raw[1:-1]

    if len(body) == _CANONICAL_LENGTH and any(
        body[i] != "-" for i in _HYPHEN_POSITIONS
    ):
        raise InvalidUserIdError("invalid UUID format")

    if any(c not in _HEX_DIGITS for c in body.replace("-", "")):
        raise InvalidUserIdError("invalid UUID format")

    try:
        return UUID(body)
    except ValueError:
        raise InvalidUserIdError("invalid UUID format") from None


def find_missing_field(dto: object) -> str | None:
    """Return a message naming the first absent/empty required field, or None."""
    for attr, wire_name in REQUIRED_FIELDS:
        if not getattr(dto, attr, None):
            return f"field validation for '{wire_name}' failed on the 'required' tag"
    return None
