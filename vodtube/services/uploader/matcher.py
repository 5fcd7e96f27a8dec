"""Wildcard matching of playlist patterns against chapter categories.

Patterns are compared case-insensitively and support a single '*':

- "minecraft" matches only "minecraft"
- "*craft" matches categories ending with "craft"
- "mine*" matches categories starting with "mine"
- "mine*craft" matches categories starting with "mine" and ending with "craft"

The pattern is split on '*' once. A pattern containing more than one '*' is
compared for plain equality, so its asterisks only match themselves.
"""


def category_matches(pattern: str, category: str) -> bool:
    """Check whether a category matches a playlist pattern.

    Args:
        pattern: Mapping pattern, may contain one '*'
        category: Chapter category

    Returns:
        True if the category matches
    """
    pattern = pattern.lower()
    category = category.lower()

    parts = pattern.split("*")
    if len(parts) != 2:
        return pattern == category

    prefix, suffix = parts
    if not prefix:
        return category.endswith(suffix)
    if not suffix:
        return category.startswith(prefix)
    # Prefix and suffix may overlap: "a*b" matches "ab"
    return category.startswith(prefix) and category.endswith(suffix)


__all__ = ["category_matches"]
