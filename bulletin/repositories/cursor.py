"""Opaque pagination cursors: URL-safe base64 of an ISO-8601 timestamp."""
import base64
import binascii
from datetime import datetime

from bulletin.exceptions import BadParamInputError


def encode_cursor(value: datetime) -> str:
    return base64.urlsafe_b64encode(value.isoformat().encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> datetime:
    """
    Return the timestamp boundary encoded in *cursor*.

    Raises ``BadParamInputError`` for anything that is not a cursor produced
    by :func:`encode_cursor`.
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
        return datetime.fromisoformat(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as exc:
        raise BadParamInputError() from exc
