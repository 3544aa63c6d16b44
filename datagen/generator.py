"""
Generation pipeline: config -> column list -> SQL script file.

Usage:
    from datagen.generator import Generator

    result = Generator(config, seed=42, output_dir="out").generate()
    print(result["rows"], result["output_path"])

The generator owns its PRNG, so two runs with the same seed and config write
byte-identical files.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Iterator, List, Optional, TypedDict

from datagen.domain.columns import ColumnDef, expand_fields
from datagen.domain.models import GeneratorConfig
from datagen.utils.logging import get_logger
from datagen.utils.profiler import profile_block
from datagen.values import make_emitter
from datagen.writer import ScriptWriter

log = get_logger(__name__)


class GenerationResult(TypedDict, total=False):
    """
    Summary of one generation run.
    """

    table: str
    output_path: str
    rows: int
    columns: int
    groups: int
    bytes_written: int
    duration_seconds: float
    throughput_rows_per_sec: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]


class Generator:
    """
    Expand a GeneratorConfig and write `<table_name>.sql`.

    Parameters
    ----------
    config : GeneratorConfig
        Validated config.
    seed : int | None
        PRNG seed. None seeds from system entropy.
    output_dir : Path | str
        Directory the script is written into. Created if missing.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        seed: Optional[int] = None,
        output_dir: Path | str = ".",
    ) -> None:
        self.config = config
        self.seed = seed
        self.output_dir = Path(output_dir)
        self.columns: List[ColumnDef] = expand_fields(config.table_schema.fields)
        self.rng = random.Random(seed)

    @property
    def output_path(self) -> Path:
        return self.output_dir / f"{self.config.table_name}.sql"

    def iter_rows(self) -> Iterator[List[str]]:
        """Yield `num_rows` rows, one token per column."""
        emitters = [make_emitter(column, self.rng) for column in self.columns]
        for _ in range(self.config.num_rows):
            yield [emit() for emit in emitters]

    def generate(self) -> GenerationResult:
        """
        Write the full script and return run statistics.

        Any I/O error propagates; a partially written file is left in place.
        """
        config = self.config
        path = self.output_path
        self.output_dir.mkdir(parents=True, exist_ok=True)

        log.info(
            f"[GENERATE START] {config.table_name}",
            extra={
                "table": config.table_name,
                "rows": config.num_rows,
                "columns": len(self.columns),
                "batch": config.write_batch_num,
                "output": str(path),
            },
        )

        with profile_block(config.table_name) as stats:
            with path.open("w", encoding="utf-8", newline="") as out:
                writer = ScriptWriter(out, config.table_name, config.write_batch_num)
                writer.write_statements(config.pre_queries)
                writer.write_create_table(
                    self.columns,
                    config.table_schema.storage_format,
                    config.table_schema.table_props,
                )
                groups = writer.write_rows(self.iter_rows())
                writer.write_statements(config.post_queries)

        duration = stats.duration_seconds
        result = GenerationResult(
            table=config.table_name,
            output_path=str(path),
            rows=config.num_rows,
            columns=len(self.columns),
            groups=groups,
            bytes_written=writer.bytes_written,
            duration_seconds=round(duration, 3),
            throughput_rows_per_sec=round(config.num_rows / duration, 2) if duration > 0 else 0.0,
            peak_rss_bytes=stats.peak_rss_bytes,
            cpu_percent=round(stats.cpu_percent, 1) if stats.cpu_percent is not None else None,
        )
        log.info(
            f"[GENERATE COMPLETE] {config.table_name}",
            extra={
                "table": config.table_name,
                "rows": result["rows"],
                "groups": groups,
                "bytes": result["bytes_written"],
                "duration": result["duration_seconds"],
            },
        )
        return result


__all__ = ["GenerationResult", "Generator"]
