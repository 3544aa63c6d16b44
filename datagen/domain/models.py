"""
Config models for the generator.

Mirror the YAML document accepted on the command line:

    num_rows: 1000
    table_name: orders
    write_batch_num: 100
    pre_queries: ["SET x=1"]
    post_queries: ["ANALYZE orders"]
    schema:
      storage_format: parquet
      table_props: {compression: zstd}
      fields:
        int:
          - {count: 3}
          - {name: id, range: {start: 0, end: 1000000}}

Models are frozen once validated. Range values stay raw here; they are
resolved against their type tag by the field expander.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

SUPPORTED_TYPES = ("int", "uint", "float", "string", "timestamp", "boolean")


class ValueRange(BaseModel):
    """
    Raw `{start, end}` pair. Interpretation depends on the enclosing type tag.
    """

    start: Any = Field(..., description="Lower bound (inclusive).")
    end: Any = Field(..., description="Upper bound; exclusive except for string lengths.")

    model_config = {"frozen": True}


class FieldSchema(BaseModel):
    """
    One entry under `schema.fields.<type>`.

    With `count > 0` the entry expands to `count` synthetic columns named
    `col_<type><i>`; with `count == 0` it is a single column called `name`.
    """

    name: Optional[str] = Field(None, description="Explicit column name (count == 0 only).")
    count: int = Field(0, ge=0, description="Number of synthetic columns.")
    nullable: float = Field(
        0.0, ge=0.0, le=1.0, description="Accepted for compatibility; has no effect on output."
    )
    range: Optional[ValueRange] = Field(None, description="Per-type value range.")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _require_name_without_count(self) -> "FieldSchema":
        if self.count == 0 and not self.name:
            raise ValueError("field entry needs either a positive 'count' or a 'name'")
        return self


class TableSchema(BaseModel):
    """
    Storage format, table properties and the grouped-by-type field map.
    """

    storage_format: str = Field(..., min_length=1, description="Used verbatim after STORED AS.")
    fields: Dict[str, List[FieldSchema]] = Field(default_factory=dict)
    table_props: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("fields", mode="before")
    @classmethod
    def _fields_default(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {tag: (entries if entries is not None else []) for tag, entries in value.items()}
        return value

    @field_validator("fields")
    @classmethod
    def _known_type_tags(cls, value: Dict[str, List[FieldSchema]]) -> Dict[str, List[FieldSchema]]:
        unknown = sorted(tag for tag in value if tag not in SUPPORTED_TYPES)
        if unknown:
            raise ValueError(
                f"unsupported type tag(s) {', '.join(unknown)}; "
                f"expected one of {', '.join(SUPPORTED_TYPES)}"
            )
        return value

    @field_validator("table_props", mode="before")
    @classmethod
    def _props_as_strings(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): _prop_text(v) for k, v in value.items()}
        return value


def _prop_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class GeneratorConfig(BaseModel):
    """
    Top-level generation config, immutable after load.
    """

    num_rows: int = Field(0, ge=0, description="Total rows to emit.")
    table_name: str = Field(..., description="Identifier used verbatim in SQL and the file name.")
    write_batch_num: int = Field(1000, ge=1, description="Rows per BATCHINSERT group.")
    table_schema: TableSchema = Field(..., alias="schema")
    pre_queries: List[str] = Field(default_factory=list)
    post_queries: List[str] = Field(default_factory=list)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("table_name")
    @classmethod
    def _non_empty_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("table_name must not be empty")
        return value

    @field_validator("pre_queries", "post_queries", mode="before")
    @classmethod
    def _queries_default(cls, value: Any) -> Any:
        return [] if value is None else value


__all__ = [
    "SUPPORTED_TYPES",
    "ValueRange",
    "FieldSchema",
    "TableSchema",
    "GeneratorConfig",
]
