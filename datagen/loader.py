"""YAML config loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from datagen.domain.columns import expand_fields
from datagen.domain.models import GeneratorConfig
from datagen.errors import ConfigLoadError, ConfigValidationError
from datagen.utils.logging import get_logger

log = get_logger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err["loc"]) or "<root>"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def parse_config(document: Any, source: str = "<config>") -> GeneratorConfig:
    """
    Validate an already-parsed YAML document.

    Ranges are resolved eagerly so a bad range is reported at load time rather
    than after the output file has been created.
    """
    if not isinstance(document, dict):
        raise ConfigValidationError(f"{source}: expected a mapping at the top level")
    try:
        config = GeneratorConfig.model_validate(document)
    except ValidationError as exc:
        raise ConfigValidationError(f"{source}: {_format_validation_error(exc)}") from exc
    expand_fields(config.table_schema.fields)
    return config


def load_config(path: Path | str) -> GeneratorConfig:
    """
    Read and validate the YAML config at `path`.

    Raises
    ------
    ConfigLoadError
        The file is missing, unreadable, or not valid YAML.
    ConfigValidationError
        The document does not describe a valid config.
    RangeConversionError
        A field range does not fit its type tag.
    """
    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"cannot read config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML in {config_path}: {exc}") from exc

    config = parse_config(document, source=str(config_path))
    log.info(
        "Config loaded",
        extra={"path": str(config_path), "table": config.table_name, "rows": config.num_rows},
    )
    return config


__all__ = ["load_config", "parse_config"]
