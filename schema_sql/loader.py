"""
Чтение файла схемы и разбор его содержимого.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.constants import SCHEMA_FILE_PATH
from .core.exceptions import FileSystemError, SchemaFileNotFoundError
from .core.models import Statement
from .parser import SQLParser

logger = logging.getLogger(__name__)


def read_schema_file(path: Union[str, Path]) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SchemaFileNotFoundError(str(path)) from None
    except (OSError, UnicodeDecodeError) as e:
        raise FileSystemError(f"Не удалось прочитать файл {path}: {e}", str(path), "read") from e


def parse_schema_sql(
    path: Optional[Union[str, Path]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> List[Statement]:
    """
    Читает файл схемы (по умолчанию Application/Schema.sql) и разбирает его.

    Имя файла используется как source_name в сообщениях об ошибках.

    Raises:
        SchemaFileNotFoundError / FileSystemError: файл не прочитан
        SyntaxError: ошибка разбора
    """
    config = config or {}
    path = Path(path or config.get("schema_file_path", SCHEMA_FILE_PATH))

    logger.info("Reading schema from %s", path)
    sql_text = read_schema_file(path)

    return SQLParser(config).parse(sql_text, source_name=str(path))
