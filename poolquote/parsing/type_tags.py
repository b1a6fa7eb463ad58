"""Parsing of Move type tags.

A coin type is written ``<package>::<module>::<Identifier>``; a pool type
carries its two coin types as generic arguments, e.g.
``0xpkg::pool::Pool<0x2::sui::SUI, 0xpkg::usdc::USDC>``.
"""

from __future__ import annotations

from poolquote.constants import KNOWN_TOKENS_BY_TYPE, NATIVE_FALLBACK_DECIMALS, TYPE_SEPARATOR
from poolquote.models.token import TokenIdentity

# Minimum segments in a struct tag: package, module, name
_MIN_TYPE_SEGMENTS = 3


def parse_type_to_token(
    type_string: str | None,
    known_tokens: dict[str, TokenIdentity] | None = None,
) -> TokenIdentity | None:
    """Resolve a coin type string to a token identity.

    Known coin types are returned unchanged from the static table. Unknown
    types get a synthetic identity named after their struct name with the
    native fallback precision.

    Args:
        type_string: Fully-qualified coin type
        known_tokens: Lookup table to use (default: KNOWN_TOKENS_BY_TYPE)

    Returns:
        TokenIdentity, or None if the string is not a struct tag
    """
    if not type_string:
        return None

    table = KNOWN_TOKENS_BY_TYPE if known_tokens is None else known_tokens
    token = table.get(type_string)
    if token is not None:
        return token

    parts = type_string.split(TYPE_SEPARATOR)
    if len(parts) < _MIN_TYPE_SEGMENTS:
        return None

    name = parts[-1]
    return TokenIdentity(
        symbol=name,
        name=name,
        decimals=NATIVE_FALLBACK_DECIMALS,
        address=type_string,
    )


def split_type_args(type_string: str) -> list[str] | None:
    """Split the outermost generic parameter list of a type tag.

    Nested parameter lists stay inside their argument:
    ``A<B<C, D>, E>`` splits into ``["B<C, D>", "E"]``.

    Returns:
        Trimmed top-level arguments, or None if the type is not generic or
        its brackets are unbalanced
    """
    start = type_string.find("<")
    end = type_string.rfind(">")
    if start < 0 or end <= start:
        return None
    if type_string[end + 1 :].strip():
        return None

    args: list[str] = []
    depth = 0
    current = start + 1
    for i in range(start + 1, end):
        char = type_string[i]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                return None
        elif char == "," and depth == 0:
            args.append(type_string[current:i].strip())
            current = i + 1
    if depth != 0:
        return None
    args.append(type_string[current:end].strip())
    return args


def extract_pool_type_args(pool_type: str | None) -> tuple[str, str] | None:
    """Extract the two coin types a pool is parametrized over.

    Args:
        pool_type: Pool type tag, e.g. ``0xpkg::pool::Pool<A, B>``

    Returns:
        (type_x, type_y), or None unless there are exactly two non-empty
        type arguments
    """
    if not pool_type:
        return None

    args = split_type_args(pool_type)
    if args is None or len(args) != 2:
        return None

    type_x, type_y = args
    if not type_x or not type_y:
        return None
    return type_x, type_y


__all__ = [
    "parse_type_to_token",
    "split_type_args",
    "extract_pool_type_args",
]
