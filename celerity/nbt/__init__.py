"""NBT tag model, binary reader and writer, builders and JSON conversion."""

__all__ = ["builders", "json_reader", "reader", "tags", "writer"]