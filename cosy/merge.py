"""
Deep merge of COSY value trees.

Merge policy:
    - object + object -> recursive merge by key
    - anything else   -> override replaces base (arrays are never
                         concatenated or merged element-wise)

Merged key order is the base's order followed by the override's new keys
in the override's order.
"""

from .value import Value, ValueKind


def merge(base: Value, override: Value) -> Value:
    """
    Deep merge override into base, in place.

    The override tree is never modified; nodes taken from it are copied.

    Args:
        base: Value updated in place
        override: Value whose fields win

    Returns:
        base, for chaining
    """
    if base.kind is ValueKind.OBJECT and override.kind is ValueKind.OBJECT:
        fields = base.data
        for key, value in override.data.items():
            if key in fields:
                merge(fields[key], value)
            else:
                fields[key] = value.copy()
        return base

    replacement = override.copy()
    base.kind = replacement.kind
    base.data = replacement.data
    base.comments = replacement.comments
    return base


def merged(base: Value, override: Value) -> Value:
    """Return the deep merge of two values without modifying either."""
    return merge(base.copy(), override)
