"""
Domain package for the generator.

Exports the config models and the flattened column model produced from them.
Keep this package focused on data definitions and validation concerns.
"""

from datagen.domain.columns import (
    ColumnDef,
    FloatRange,
    IntRange,
    StringLenRange,
    TimestampRange,
    UintRange,
    expand_fields,
)
from datagen.domain.models import (
    SUPPORTED_TYPES,
    FieldSchema,
    GeneratorConfig,
    TableSchema,
    ValueRange,
)

__all__ = [
    "SUPPORTED_TYPES",
    "ValueRange",
    "FieldSchema",
    "TableSchema",
    "GeneratorConfig",
    "ColumnDef",
    "IntRange",
    "UintRange",
    "FloatRange",
    "StringLenRange",
    "TimestampRange",
    "expand_fields",
]
