"""
Response envelope decoding.

Every appliance response is a JSON object ``{"code": int, "message": str,
"data": ...}``. ``code == 0`` means success and ``data`` holds the payload;
anything else is a failure described by ``message``.

The appliance serializes some empty array fields as ``{}``. :func:`normalize`
rewrites those before structural decoding so list-typed fields validate.
"""

from typing import Any, Iterable, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from .constants import EMPTY_ARRAY_FIELDS
from .exceptions import DecodeError, EmptyResponseError, RemoteError


class Envelope(BaseModel):
    code: int
    message: Optional[str] = ""
    data: Any = None


def normalize(raw: bytes, fields: Iterable[str] = EMPTY_ARRAY_FIELDS) -> bytes:
    """
    Rewrite ``"<field>":{}`` into ``"<field>":[]`` for each allow-listed field.

    The rewrite is textual and idempotent. Passing an empty ``fields``
    returns the input unchanged.
    """
    for name in fields:
        key = b'"' + name.encode('utf-8') + b'":'
        raw = raw.replace(key + b'{}', key + b'[]')
    return raw


def decode(raw: bytes, shape: Optional[Any] = None,
           fields: Iterable[str] = EMPTY_ARRAY_FIELDS) -> Any:
    """
    Decode an envelope and return its payload in the requested shape.

    Args:
        raw: Response body
        shape: Type to validate ``data`` against (``str``, a model,
            ``List[Model]``...); ``None`` discards the payload
        fields: Empty-array fields to normalize first; ``()`` skips normalization

    Returns:
        The validated payload, or None when ``shape`` is None or the
        appliance sent no data

    Raises:
        EmptyResponseError: If ``raw`` is empty
        DecodeError: If the body is not an envelope or ``data`` has the wrong shape
        RemoteError: If the envelope code is non-zero
    """
    if not raw:
        raise EmptyResponseError("No data in body")

    raw = normalize(raw, fields)
    try:
        envelope = Envelope.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"malformed response envelope: {e}") from e

    if envelope.code != 0:
        raise RemoteError(envelope.code, envelope.message or "")

    if shape is None or envelope.data is None:
        return None
    try:
        return TypeAdapter(shape).validate_python(envelope.data)
    except ValidationError as e:
        raise DecodeError(f"unexpected response data: {e}") from e
