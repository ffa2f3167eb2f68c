from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Any

import pandas as pd
from dotenv import load_dotenv

from ..api.client import ImportApiClient, SubmissionError
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..csvio import CsvImportError, encode_vms, parse_import, read_import_file, write_asset_template
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import ImportConfig
from ..models.processing_result import ProcessingResult
from ..services.orchestrator import ProcessingError, process_all, scan_import_files
from ..services.sinks import ApiSink, DatabaseSink, Sink
from ..services.summary import render_file_stat, render_summary_line

"""CLI entry point: `srph-import` / `python -m srph_import.cli`.

Default action imports every mapped file of the configured directory.
Auxiliary actions (--template, --export-vms, --inspect-data) run instead of
the import and exit.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

PREVIEW_ROWS = 3


@contextmanager
def _db_connection(cfg: ImportConfig) -> Iterator[Any]:  # pragma: no cover (thin wrapper)
    """Yield a psycopg2 cursor for the database sink.

    Resolution order: DATABASE_URL / PGDSN, then PGHOST/PGPORT/PGUSER/
    PGPASSWORD/PGDATABASE, then the `database` section of the config file.
    Transactions are handled per file by DatabaseSink.
    """
    import psycopg2

    db_cfg = cfg.database
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if not dsn:
        host = os.getenv("PGHOST", db_cfg.host or "localhost")
        port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
        user = os.getenv("PGUSER", db_cfg.user or "postgres")
        password = os.getenv("PGPASSWORD", db_cfg.password or "")
        database = os.getenv("PGDATABASE", db_cfg.database or "srph_mis")
        dsn = f"host={host} port={port} user={user} dbname={database}"
        if password:
            dsn += f" password={password}"

    conn = psycopg2.connect(dsn)
    conn.autocommit = True  # BEGIN/COMMIT issued explicitly per file
    cur = conn.cursor()
    try:
        yield cur
    finally:
        cur.close()
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; its values win over variables already in the environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _apply_env_overrides(cfg: ImportConfig) -> ImportConfig:
    api = cfg.api
    url = os.getenv("SRPH_API_URL")
    token = os.getenv("SRPH_API_TOKEN")
    if url:
        api = replace(api, base_url=url.rstrip("/"))
    if token:
        api = replace(api, token=token)
    return replace(cfg, api=api)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="srph-import", description="SRPH-MIS CSV importer")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to import.yml")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Parse and validate files without submitting")
    p.add_argument("--sink", choices=["api", "database"], help="Override the configured sink")
    p.add_argument("--inspect-data", action="store_true", help="Print normalized sample records then exit")
    p.add_argument("--template", type=Path, metavar="PATH", help="Write the asset import template then exit")
    p.add_argument("--export-vms", type=Path, metavar="PATH", help="Export the VM inventory as CSV then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ImportConfig) -> int:
    """Print the first normalized records of every mapped file as a table."""
    try:
        files = scan_import_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no import files")
        return EXIT_SUCCESS_ALL
    for f in files:
        kind = cfg.kind_for(f.name)
        if kind is None:
            print(f"FILE: {f.name} (no kind mapping)")
            continue
        print(f"FILE: {f.name} kind={kind.value}")
        try:
            records = parse_import(read_import_file(f), kind)
        except CsvImportError as e:
            print(f"  error: {e}")
            continue
        frame = pd.DataFrame([r.to_payload() for r in records[:PREVIEW_ROWS]])
        print(f"  records={len(records)}")
        print(frame.to_string(index=False))
    return EXIT_SUCCESS_ALL


def _export_vms(cfg: ImportConfig, out: Path, logger: Any) -> int:
    try:
        with ImportApiClient(cfg.api) as client:
            vms = client.fetch_vms()
    except SubmissionError as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL
    out.write_text(encode_vms(vms), encoding="utf-8")
    logger.info(f"exported {len(vms)} virtual machines to {out}")
    return EXIT_SUCCESS_ALL


def _run_import(cfg: ImportConfig, sink_name: str | None, logger: Any) -> ProcessingResult:
    if sink_name is None:
        logger.info("mode=dry-run (nothing is submitted)")
        return process_all(cfg, sink=None)
    if sink_name == "database":
        with _db_connection(cfg) as cur:
            logger.info("mode=database")
            return process_all(cfg, sink=DatabaseSink(cur))
    with ImportApiClient(cfg.api) as client:
        logger.info(f"mode=api url={cfg.api.base_url}")
        sink: Sink = ApiSink(client)
        return process_all(cfg, sink=sink)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストから [] を渡せるように)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.template is not None:
        written = write_asset_template(args.template)
        logger.info(f"asset template written: {written}")
        return EXIT_SUCCESS_ALL

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = _apply_env_overrides(load_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.export_vms is not None:
        return _export_vms(cfg, args.export_vms, logger)

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)

    sink_name = None if args.dry_run else (args.sink or cfg.sink)
    try:
        result = _run_import(cfg, sink_name, logger)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except Exception as e:  # connection setup (psycopg2.OperationalError etc.)
        logger.error(f"{sink_name} sink failed: {e}")
        return EXIT_FATAL

    for stat in result.file_stats or []:
        logger.debug(render_file_stat(stat))
    total_files = result.success_files + result.failed_files + result.skipped_files
    log_summary(render_summary_line(total_files, result))

    if result.failed_files > 0 or result.rejected_records > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
