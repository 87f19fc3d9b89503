"""Storage adapters for dbent value types."""

from dbent.adapters.sqlite import adapt_key, convert_key, key_row_factory, register_adapters

__all__ = [
    "adapt_key",
    "convert_key",
    "key_row_factory",
    "register_adapters",
]
