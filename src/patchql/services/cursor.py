"""Opaque pagination cursors.

A cursor is the standard base64 text of a sequence number packed as an
8-byte little-endian unsigned integer. Decoding reads the first eight bytes
back as a signed integer, so ``decode_cursor(encode_cursor(x)) == x`` for
every 64-bit signed ``x``.
"""

from __future__ import annotations

import base64
import binascii
import struct

from patchql.core.errors import InvalidCursorEncodingError, TruncatedCursorError

__all__ = ["CURSOR_WIDTH", "decode_cursor", "encode_cursor"]

CURSOR_WIDTH = 8
_U64_MASK = (1 << 64) - 1


def encode_cursor(seq: int) -> str:
    """Return the opaque cursor token for a sequence number."""
    return base64.b64encode(struct.pack("<Q", seq & _U64_MASK)).decode("ascii")


def decode_cursor(token: str) -> int:
    """Return the sequence number carried by ``token``.

    Raises:
        InvalidCursorEncodingError: If ``token`` is not valid base64.
        TruncatedCursorError: If ``token`` decodes to fewer than eight bytes.
    """
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError) as err:
        raise InvalidCursorEncodingError(f"Invalid cursor encoding: {err}") from err

    if len(raw) < CURSOR_WIDTH:
        raise TruncatedCursorError(
            "Error decoding cursor. Is it a valid base64 encoded i64?"
        )
    (seq,) = struct.unpack_from("<q", raw)
    return seq
