from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import ConfigError, load_config
from src.errors import EmptyExportError, RecordIndexError
from src.logging.error_log import ErrorLogBuffer
from src.logging.init import log_summary, set_debug, setup_logging
from src.models.config_models import ManifestConfig
from src.services.preview import render_preview
from src.services.session import ManifestSession
from src.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the optional YAML config
- Ingest the first sheet of the source file
- Delete the requested line numbers (as shown by --preview)
- Print the preview, export ``T1.M<reference>.PBS``
- Emit one SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NO_DATA = 2

DEFAULT_CONFIG_PATH = Path("config/manifest.yml")


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (existing environment variables win)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="manifest-export",
        description="Spreadsheet -> shipping manifest (.PBS) exporter",
    )
    p.add_argument("source", type=Path, help="Spreadsheet (.xlsx or .csv); only the first sheet is read")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: $MANIFEST_CONFIG or config/manifest.yml)")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for the exported file")
    p.add_argument(
        "--delete",
        type=int,
        nargs="+",
        default=[],
        metavar="LINE",
        help="Line numbers (1-based, as previewed) to drop before export",
    )
    p.add_argument("--preview", action="store_true", help="Print the normalized records")
    p.add_argument("--no-export", action="store_true", help="Do not write the export file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> ManifestConfig:
    if args.config is not None:
        return load_config(args.config)
    env_path = os.getenv("MANIFEST_CONFIG")
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ManifestConfig()


def _resolve_output_dir(args: argparse.Namespace, cfg: ManifestConfig) -> Path:
    if args.output_dir is not None:
        return args.output_dir
    return Path(os.getenv("MANIFEST_OUTPUT_DIR") or cfg.output_directory)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示指定)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    error_log = ErrorLogBuffer()
    session = ManifestSession(cfg, error_log=error_log)

    result = session.ingest(args.source)
    if not result.ok:
        log_path = error_log.flush()
        if log_path is not None:
            logger.info(f"error log written: {log_path}")
        log_summary(render_summary_line(result, len(session.store))[8:])
        return EXIT_FATAL

    if args.delete:
        try:
            session.delete_selected(line - 1 for line in args.delete)
        except RecordIndexError as e:
            logger.error(f"delete: line {e.index + 1} does not exist (records={e.length})")
            log_summary(render_summary_line(result, len(session.store))[8:])
            return EXIT_FATAL

    if args.preview:
        print(render_preview(session.store.records))

    output = None
    if not args.no_export:
        try:
            output = session.export(_resolve_output_dir(args, cfg))
        except EmptyExportError:
            log_summary(render_summary_line(result, len(session.store))[8:])
            return EXIT_NO_DATA
        except OSError as e:
            logger.error(f"export: {e}")
            log_summary(render_summary_line(result, len(session.store))[8:])
            return EXIT_FATAL
        logger.info(f"wrote {output}")

    # render_summary_line は "SUMMARY " 付きなので除去 (log_summary が付与)
    log_summary(render_summary_line(result, len(session.store), output)[8:])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
