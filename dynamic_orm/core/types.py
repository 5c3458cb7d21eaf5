"""Shared core type aliases used across contracts, result sets, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

NamedParams = Dict[str, Any]
PositionalParams = List[Any]
QueryParams = Union[NamedParams, PositionalParams, None]

Record = Dict[str, Any]
MaybeRecord = Optional[Record]
