"""Skylink identifier grammar and encoding conversion.

A skylink is 34 bytes of raw data expressed either as 46 characters of
unpadded URL-safe base64 (the canonical form) or as 55 characters of
lowercase, unpadded RFC 4648 base32hex.
"""

import base64
import re

BASE64_SKYLINK_LENGTH = 46
BASE32_SKYLINK_LENGTH = 55
RAW_SKYLINK_SIZE = 34

# Matches candidates only, a 55 character one still has to pass is_base32_skylink.
SKYLINK_MATCHER = f"[a-z0-9]{{{BASE32_SKYLINK_LENGTH}}}|[a-zA-Z0-9-_]{{{BASE64_SKYLINK_LENGTH}}}"

_base64_skylink = re.compile(f"^[a-zA-Z0-9-_]{{{BASE64_SKYLINK_LENGTH}}}$")
_base32_skylink = re.compile(f"^[0-9a-v]{{{BASE32_SKYLINK_LENGTH}}}$")


def is_base64_skylink(value: str) -> bool:
    return _base64_skylink.match(value) is not None


def is_base32_skylink(value: str) -> bool:
    return _base32_skylink.match(value) is not None


def convert_skylink_to_base64(skylink: str) -> str:
    """Convert a base32 encoded skylink to its canonical base64 form.

    Args:
        skylink: 55 character base32hex skylink

    Returns:
        46 character URL-safe base64 skylink without padding

    Raises:
        ValueError: If the value is not a base32 skylink
    """
    if not is_base32_skylink(skylink):
        raise ValueError(f"{skylink} is not a base32 encoded skylink")

    # 34 bytes encode to 55 base32 characters plus a single pad character
    raw = base64.b32hexdecode(skylink.upper() + "=")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def convert_skylink_to_base32(skylink: str) -> str:
    """Convert a base64 encoded skylink to its lowercase base32 form.

    Args:
        skylink: 46 character URL-safe base64 skylink

    Returns:
        55 character base32hex skylink without padding

    Raises:
        ValueError: If the value is not a base64 skylink
    """
    if not is_base64_skylink(skylink):
        raise ValueError(f"{skylink} is not a base64 encoded skylink")

    raw = base64.urlsafe_b64decode(skylink + "==")
    return base64.b32hexencode(raw).decode("ascii").rstrip("=").lower()


def normalize_skylink(skylink: str) -> str:
    """Return the canonical base64 form of a base32 or base64 skylink."""
    if len(skylink) == BASE32_SKYLINK_LENGTH:
        return convert_skylink_to_base64(skylink)
    return skylink
