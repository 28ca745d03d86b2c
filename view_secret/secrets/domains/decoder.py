"""Base64 decoding of secret values."""
import base64
import binascii

from .errors import DecodeError


def decode(value: str) -> bytes:
    """
    Decode standard base64 text.

    Args:
        value: Base64 text (standard alphabet, '=' padded)

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the text has invalid characters or bad padding
    """
    try:
        return base64.b64decode(value.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"illegal base64 data: {e}") from e


def decode_text(value: str) -> str:
    """Decode a value for display: UTF-8 text with surrounding whitespace trimmed."""
    return decode(value).decode("utf-8", errors="replace").strip()


def encode(plain) -> str:
    """Base64-encode text or bytes, the way secret stores hold values."""
    if isinstance(plain, str):
        plain = plain.encode("utf-8")
    return base64.b64encode(plain).decode("ascii")
