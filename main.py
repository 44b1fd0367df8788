"""
main.py

Точка входа парсера DDL-схемы PostgreSQL.

Запуск:
    python main.py
    python main.py --schema Application/Schema.sql --format text
    python main.py --schema schema.sql --format markdown --out schema.md
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from schema_sql.core.constants import DEFAULT_CONFIG, OUTPUT_FORMATS, SCHEMA_FILE_PATH
from schema_sql.core.exceptions import FileSystemError, SyntaxError
from schema_sql.loader import parse_schema_sql
from schema_sql.reporter import Reporter

logger = logging.getLogger("schema_sql")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="PostgreSQL Schema Parser (Application/Schema.sql -> AST)"
    )

    parser.add_argument(
        "--schema",
        default=SCHEMA_FILE_PATH,
        help=f"SQL-файл схемы (по умолчанию: {SCHEMA_FILE_PATH})",
    )

    parser.add_argument(
        "--format",
        choices=list(OUTPUT_FORMATS.values()),
        default=DEFAULT_CONFIG["output"]["format"],
        help="Формат отчёта (по умолчанию: json)",
    )

    parser.add_argument(
        "--out",
        help="Файл для сохранения отчёта (если не указан, вывод в stdout)",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Подробный лог разбора",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else DEFAULT_CONFIG["general"]["log_level"],
        format="%(levelname)s %(name)s: %(message)s",
    )

    # --- Разбор ---
    try:
        statements = parse_schema_sql(args.schema, DEFAULT_CONFIG["parser"])
    except SyntaxError as e:
        print(e.pretty(), file=sys.stderr)
        return 1
    except FileSystemError as e:
        print(e.message, file=sys.stderr)
        return 1

    logger.info("Parsed %d statements", len(statements))

    # --- Экспорт ---
    output = Reporter().export(
        statements,
        format=args.format,
        source=args.schema,
        output_file=args.out,
    )

    if output:
        print(output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
