from bitbloom.types.element_types import BloomSerializable, element_to_bytes

__all__ = ["BloomSerializable", "element_to_bytes"]
