"""
tfstate_viewer/state/parse.py

Decodes raw Terraform state bytes and hands the JSON value to the normalizer.

Exports:
    - StateDecodeError
    - decode_state
    - parse_state
    - read_state_file
"""

from __future__ import annotations

import json
import logging
from typing import Any, Union

import aiofiles

from tfstate_viewer.models.state import NormalizedState
from tfstate_viewer.state.normalize import normalize

logger = logging.getLogger(__name__)


class StateDecodeError(ValueError):
    """Raised when a state payload is not valid UTF-8 JSON.

    Attributes:
        message (str): Human-readable reason.
        size (int): Size of the rejected payload in bytes (or characters).
    """

    def __init__(self, message: str, size: int = 0) -> None:
        super().__init__(message)
        self.size = size


def decode_state(data: Union[bytes, str]) -> Any:
    """Decode a JSON state payload.

    Args:
        data: The raw payload as bytes or text.

    Returns:
        Any: The decoded JSON value, whatever its shape.

    Raises:
        StateDecodeError: If the payload is not UTF-8 or not JSON.
    """
    try:
        text = data.decode("utf-8-sig") if isinstance(data, bytes) else data
    except UnicodeDecodeError as exc:
        raise StateDecodeError(f"State is not valid UTF-8: {exc}", len(data)) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise StateDecodeError(f"State is not valid JSON: {exc}", len(data)) from exc


def parse_state(data: Union[bytes, str]) -> NormalizedState:
    """Decode a state payload and normalize it.

    Raises:
        StateDecodeError: If the payload cannot be decoded.
    """
    return normalize(decode_state(data))


async def read_state_file(path: str) -> NormalizedState:
    """Read a state file from disk and normalize it.

    Args:
        path (str): Path to a terraform.tfstate (or `terraform show -json`) file.

    Returns:
        NormalizedState: The normalized document.

    Raises:
        FileNotFoundError: If the path does not exist.
        StateDecodeError: If the file content is not JSON.
    """
    async with aiofiles.open(path, "rb") as f:
        data = await f.read()
    logger.info("Read %d bytes of state from %s", len(data), path)
    return parse_state(data)
