"""
datagen - synthetic data generator for batch-insert SQL scripts.

Given a YAML schema description, writes a single `<table_name>.sql` script
that runs a prelude of statements, creates one table with a chosen storage
format and optional table properties, inserts random rows using the
`BATCHINSERT ... BATCHVALUES(VALUES (...),...)` dialect, and runs a postlude.

The pipeline is:

- YAML -> GeneratorConfig (pydantic)
- field expander -> ordered ColumnDef list
- value generator -> one unquoted token per column per row
- script writer -> batched groups of at most `write_batch_num` rows
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from datagen.config import Settings, get_settings
from datagen.domain.columns import ColumnDef, expand_fields
from datagen.domain.models import FieldSchema, GeneratorConfig, TableSchema, ValueRange
from datagen.errors import (
    ConfigLoadError,
    ConfigValidationError,
    DatagenError,
    RangeConversionError,
)
from datagen.generator import GenerationResult, Generator
from datagen.loader import load_config, parse_config
from datagen.utils.logging import configure_logging, get_logger
from datagen.values import generate_value, make_emitter
from datagen.writer import ScriptWriter

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Config model
    "GeneratorConfig",
    "TableSchema",
    "FieldSchema",
    "ValueRange",
    # Pipeline
    "ColumnDef",
    "expand_fields",
    "generate_value",
    "make_emitter",
    "ScriptWriter",
    "Generator",
    "GenerationResult",
    "load_config",
    "parse_config",
    # Errors
    "DatagenError",
    "ConfigLoadError",
    "ConfigValidationError",
    "RangeConversionError",
    # Logging
    "configure_logging",
    "get_logger",
]
