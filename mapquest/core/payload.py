"""Strict JSON decoding for API response bodies."""

import json
from typing import Any, Union

from mapquest.core.errors import DecodeError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_json(body: Union[str, bytes]) -> Any:
    """Decode ``body``, rejecting the NaN/Infinity literals json.loads accepts by default."""
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON in response: {exc}") from exc
