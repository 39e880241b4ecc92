"""
Metadata value types.

Metadata maps are loosely structured but closed over a small set of JSON
scalar types.
"""
from typing import Dict, Optional, Union

MetadataValue = Optional[Union[str, int, float, bool]]
Metadata = Dict[str, MetadataValue]

METADATA_KEY_MAX_LENGTH = 100


def is_metadata_value(value: object) -> bool:
    """Check that a value belongs to the closed metadata variant."""
    return value is None or isinstance(value, (str, int, float, bool))


def is_metadata_key(key: object) -> bool:
    return isinstance(key, str) and 0 < len(key.strip()) <= METADATA_KEY_MAX_LENGTH
