"""Type tag parsing."""

from poolquote.parsing.type_tags import extract_pool_type_args, parse_type_to_token, split_type_args

__all__ = ["parse_type_to_token", "extract_pool_type_args", "split_type_args"]
