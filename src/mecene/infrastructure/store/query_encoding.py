"""
Query string encoding for the store REST transport.

Nested queries are flattened into bracket notation:
    {"projectId": {"$gt": 0}}         -> projectId[$gt]=0
    {"status": {"$nin": ["A", "B"]}}  -> status[$nin][0]=A&status[$nin][1]=B
    {"$or": [{"ownerAddress": "0x1"}]} -> $or[0][ownerAddress]=0x1
"""

from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

# Query key carrying params the server reads outside of the filter
SERVER_PARAMS_KEY = "$client"


def build_query(query: Mapping[str, Any], params: Optional[Mapping] = None) -> dict:
    """
    Merge server params into a query under $client.

    Args:
        query: Filter and pagination query
        params: Optional server params (e.g. {"schema": ...})

    Returns:
        New query dictionary
    """
    merged = dict(query)
    if params:
        merged[SERVER_PARAMS_KEY] = dict(params)
    return merged


def encode_query(query: Mapping[str, Any], prefix: str = "") -> List[Tuple[str, str]]:
    """
    Flatten a query into (key, value) pairs.

    Args:
        query: Query dictionary
        prefix: Key prefix for nested values

    Returns:
        Ordered list of query string pairs
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in query.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        pairs.extend(_encode_value(name, value))
    return pairs


def _encode_value(name: str, value: Any) -> List[Tuple[str, str]]:
    if isinstance(value, Mapping):
        return encode_query(value, name)

    if isinstance(value, (list, tuple)):
        pairs: List[Tuple[str, str]] = []
        for index, item in enumerate(value):
            pairs.extend(_encode_value(f"{name}[{index}]", item))
        return pairs

    return [(name, _encode_scalar(value))]


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if value is None:
        return "null"
    return str(value)
