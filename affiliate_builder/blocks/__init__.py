"""Registre des blocs du site affilié."""
from .base import BlockCategory, BlockType, BlockTypeDefinition, PropertyField, PropertyFieldType, SelectOption
from .registry import (
    BLOCK_REGISTRY,
    check_registry,
    default_properties_for,
    effective_properties,
    get_block_definition,
    get_blocks_by_category,
    validate_properties,
)

__all__ = [
    "BlockCategory",
    "BlockType",
    "BlockTypeDefinition",
    "PropertyField",
    "PropertyFieldType",
    "SelectOption",
    "BLOCK_REGISTRY",
    "check_registry",
    "default_properties_for",
    "effective_properties",
    "get_block_definition",
    "get_blocks_by_category",
    "validate_properties",
]
