"""
Form encoding of nested payloads.

The metrics service accepts form bodies and query strings in bracket
notation, e.g. ``gauges[0][name]=cpu.load&gauges[0][value]=0.42``.
"""
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode


def _flatten(value: Any, prefix: str) -> List[Tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    elif isinstance(value, bool):
        return [(prefix, '1' if value else '0')]
    else:
        return [(prefix, str(value))]

    pairs = []
    for key, item in items:
        pairs.extend(_flatten(item, f"{prefix}[{key}]"))
    return pairs


def build_query(data: Mapping[str, Any]) -> str:
    """
    URL-encode a (possibly nested) mapping using bracketed keys.

    ``None`` values and empty containers produce no pairs. Booleans are
    rendered as ``1`` and ``0``.

    Args:
        data (dict): The data to encode

    Returns:
        str: The encoded string, without a leading ``?``

    Raises:
        TypeError: If ``data`` is not a mapping
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"Expected a mapping, got {type(data).__name__}")
    pairs = []
    for key, value in data.items():
        pairs.extend(_flatten(value, str(key)))
    return urlencode(pairs)


def normalize_tags(tags: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """
    Normalize a tag filter to a sorted list of unique tags.

    A single string counts as one tag, ``None`` as no tags.
    """
    if not tags:
        return []
    if isinstance(tags, str):
        return [tags]
    return sorted(set(tags))
