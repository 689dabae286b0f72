from __future__ import annotations

import logging
import re

from analytics.contexts.time_ranges.domain import (
    CustomRangeSpec,
    DecodeError,
    InvalidRangeError,
    NamedRangeSpec,
    RangeName,
    RangeSpec,
)
from analytics.shared_kernel.primitives import UtcTimestamp

log = logging.getLogger(__name__)

_CUSTOM_TOKEN = re.compile(r"^(-?[0-9]+):(-?[0-9]+)$")

DEFAULT_RANGE: RangeSpec = NamedRangeSpec(RangeName.LAST_7_DAYS)


def serialize(spec: RangeSpec) -> str:
    """
    Encode a range spec as a compact persistence/URL token.

    Named specs use the range identifier verbatim; custom specs use
    `"{start_epoch_ms}:{end_epoch_ms}"`. The `ALL_TIME` variant is UI-session state and is
    encoded exactly like a plain custom range.
    """
    if isinstance(spec, NamedRangeSpec):
        return spec.name.value
    return f"{spec.start.epoch_ms()}:{spec.end.epoch_ms()}"


def deserialize(token: str) -> RangeSpec:
    """
    Decode a token produced by `serialize`.

    Args:
        token: Persisted token.
    Returns:
        RangeSpec: `NamedRangeSpec` for a known identifier, `CustomRangeSpec` for a
        `start:end` epoch-millisecond pair.
    Assumptions:
        Tokens are case-sensitive; surrounding whitespace is ignored.
    Raises:
        DecodeError: If the token is malformed or encodes a reversed range.
    Side Effects:
        None.
    """
    normalized = token.strip()
    if ":" not in normalized:
        name = RangeName.from_token(normalized)
        if name is None:
            raise DecodeError(f"unknown range name {normalized!r}", token=token)
        return NamedRangeSpec(name)

    match = _CUSTOM_TOKEN.match(normalized)
    if match is None:
        raise DecodeError(f"malformed custom range token {normalized!r}", token=token)
    try:
        return CustomRangeSpec(
            start=UtcTimestamp.from_epoch_ms(int(match.group(1))),
            end=UtcTimestamp.from_epoch_ms(int(match.group(2))),
        )
    except InvalidRangeError as error:
        raise DecodeError(f"custom range token {normalized!r} is reversed", token=token) from error
    except (OverflowError, ValueError) as error:
        # int() rejects digit strings past the interpreter limit with ValueError.
        raise DecodeError(f"custom range token {normalized!r} is out of range", token=token) from error


def deserialize_or_default(token: str | None, *, default: RangeSpec = DEFAULT_RANGE) -> RangeSpec:
    """Decode a persisted token, falling back to `default` when it is missing or malformed."""
    if token is None or not token.strip():
        return default
    try:
        return deserialize(token)
    except DecodeError:
        log.warning("range token decode failed: token=%r fallback=%s", token, serialize(default))
        return default


__all__ = [
    "DEFAULT_RANGE",
    "deserialize",
    "deserialize_or_default",
    "serialize",
]
