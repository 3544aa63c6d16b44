"""
Pytest configuration for the generator.

Provides fixtures for:
- Building config dictionaries and validated configs
- Writing YAML config files into a temp directory
- Parsing generated scripts back into groups and rows
"""

from __future__ import annotations

import copy
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import yaml

from datagen.domain.models import GeneratorConfig

_VALUES_RE = re.compile(r"VALUES \(([^()]*)\)")


@pytest.fixture(autouse=True)
def restore_root_logging():
    """
    Undo logging configuration done by CLI invocations between tests.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def base_config() -> Dict[str, Any]:
    """
    Minimal valid config document: one int column, ten rows.
    """
    return {
        "num_rows": 10,
        "table_name": "t",
        "write_batch_num": 4,
        "pre_queries": [],
        "post_queries": [],
        "schema": {
            "storage_format": "parquet",
            "fields": {"int": [{"count": 1}]},
            "table_props": {},
        },
    }


@pytest.fixture
def make_config(base_config: Dict[str, Any]) -> Callable[..., GeneratorConfig]:
    """
    Factory that overrides top-level keys (and `schema` sub-keys) of base_config.
    """

    def _make(**overrides: Any) -> GeneratorConfig:
        document = copy.deepcopy(base_config)
        schema_overrides = overrides.pop("schema", {})
        document.update(overrides)
        document["schema"].update(schema_overrides)
        return GeneratorConfig.model_validate(document)

    return _make


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[Any, str], Path]:
    """
    Dump a document (or raw text) to a YAML file under tmp_path.
    """

    def _write(document: Any, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write


def parse_groups(script: str) -> List[List[List[str]]]:
    """
    Split a generated script into BATCHINSERT groups of rows of tokens.
    """
    groups = []
    for line in script.splitlines():
        if line.startswith("BATCHINSERT"):
            groups.append([body.split(",") for body in _VALUES_RE.findall(line)])
    return groups


@pytest.fixture
def groups_of() -> Callable[[str], List[List[List[str]]]]:
    return parse_groups
