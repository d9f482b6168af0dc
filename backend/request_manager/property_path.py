"""Property paths — dotted addresses into nested request payloads.

``address.street``, ``address[street]`` and ``[address][street]`` all name
the same location.
"""

import re
from typing import Any

_BRACKET = re.compile(r"\[([^\[\]]*)\]")


def normalize(path: str) -> str:
    """Rewrite bracket segments as dotted ones."""
    dotted = _BRACKET.sub(lambda m: f".{m.group(1)}", path)
    return ".".join(part for part in dotted.split(".") if part != "")


def split(path: str) -> list[str]:
    normalized = normalize(path)
    return normalized.split(".") if normalized else []


def set_value(target: dict, path: str, value: Any) -> dict:
    """Write value at path inside target, creating intermediate dicts as needed.

    Args:
        target: Mapping to write into (mutated in place)
        path: Dotted or bracketed property path
        value: Value to store at the leaf

    Returns:
        The target mapping
    """
    segments = split(path)
    if not segments:
        raise ValueError("Property path must not be empty")

    node = target
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child

    node[segments[-1]] = value
    return target

