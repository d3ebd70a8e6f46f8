"""Utility helper functions for product ID parsing and ordering."""
import re

# ASCII comma, full-width comma, and any whitespace (including newlines)
_ID_SEPARATORS = re.compile(r"[,，\s]+")


def normalize_string(text: str) -> str:
    """Normalize string for comparison by stripping surrounding whitespace.

    Used when comparing product names, which are matched verbatim apart
    from leading/trailing blanks.

    Args:
        text: The string to normalize.

    Returns:
        str: Stripped string, or an empty string for None/empty input.

    Example:
        >>> normalize_string("  Amoxicillin Capsules ")
        'Amoxicillin Capsules'
    """
    if not text:
        return ""
    return text.strip()


def dedupe_ids(product_ids: list[str]) -> list[str]:
    """Strip, drop blanks and remove duplicates while keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for raw in product_ids:
        product_id = (raw or "").strip()
        if product_id and product_id not in seen:
            seen.add(product_id)
            result.append(product_id)
    return result


def parse_product_ids(text: str) -> list[str]:
    """Split free text on commas, full-width commas and whitespace.

    Example:
        >>> parse_product_ids("1008, 1009\\n1008，1010")
        ['1008', '1009', '1010']
    """
    if not text:
        return []
    return dedupe_ids(_ID_SEPARATORS.split(text))


def numeric_id_key(product_id: str) -> tuple[int, int, str]:
    """Sort key that orders IDs as base-10 integers.

    Non-numeric IDs sort after every numeric ID, lexically among themselves.
    Only ASCII digits count as numeric.
    """
    if product_id.isascii() and product_id.isdigit():
        return 0, int(product_id), product_id
    return 1, 0, product_id


def sorted_ids(product_ids: list[str]) -> list[str]:
    return sorted(product_ids, key=numeric_id_key)


def min_id(product_ids: list[str]) -> str:
    """Numerically smallest ID, or an empty string for an empty list."""
    if not product_ids:
        return ""
    return min(product_ids, key=numeric_id_key)
