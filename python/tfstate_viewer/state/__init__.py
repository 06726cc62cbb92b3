"""
tfstate_viewer/state/__init__.py

Provides a convenient import interface for the state submodules:

- normalize.py for the total JSON -> NormalizedState transform
- parse.py for decoding raw bytes and reading state files

Exports:
  - normalize
  - StateDecodeError, decode_state, parse_state, read_state_file
"""

from tfstate_viewer.state.normalize import normalize
from tfstate_viewer.state.parse import (
    StateDecodeError,
    decode_state,
    parse_state,
    read_state_file,
)

__all__ = [
    "normalize",
    "StateDecodeError",
    "decode_state",
    "parse_state",
    "read_state_file",
]
