"""
Константы парсера DDL-схемы: таблицы грамматики и конфигурация по умолчанию.
"""

from .models import OnDelete, PostgresType

# Версия системы
VERSION = "1.0.0"

# Файл схемы приложения по умолчанию
SCHEMA_FILE_PATH = "Application/Schema.sql"

# Имя источника в сообщениях об ошибках, если не задано явно
DEFAULT_SOURCE_NAME = "<input>"

# Написания типов колонок.
# Порядок важен: проверяются сверху вниз, более длинные ключевые слова
# раньше своих префиксов (INTEGER/INT4 раньше INT).
# Многословные типы заданы кортежем слов: между словами допускаются
# пробелы и комментарии.
TYPE_KEYWORDS = (
    (PostgresType.UUID, (("UUID",),)),
    (PostgresType.TEXT, (("TEXT",),)),
    (PostgresType.BIGINT, (("BIGINT",), ("INT8",))),
    (PostgresType.INT, (("INTEGER",), ("INT4",), ("INT",))),
    (PostgresType.BOOLEAN, (("BOOLEAN",), ("BOOL",))),
    (PostgresType.TIMESTAMP_WITH_TIMEZONE, (
        ("TIMESTAMPZ",),
        ("TIMESTAMPTZ",),
        ("TIMESTAMP", "WITH", "TIME", "ZONE"),
    )),
    (PostgresType.REAL, (("REAL",), ("FLOAT4",))),
    (PostgresType.DOUBLE, (("DOUBLE", "PRECISION"), ("FLOAT8",))),
    (PostgresType.DATE, (("DATE",),)),
    (PostgresType.BINARY, (("BINARY",),)),
    (PostgresType.TIME, (("TIME",),)),
)

# Действия ON DELETE (сравниваются с учётом регистра)
ON_DELETE_KEYWORDS = (
    (("NO", "ACTION"), OnDelete.NO_ACTION),
    (("RESTRICT",), OnDelete.RESTRICT),
    (("SET", "NULL"), OnDelete.SET_NULL),
    (("CASCADE",), OnDelete.CASCADE),
)

# Форматы вывода
OUTPUT_FORMATS = {
    'JSON': 'json',
    'TEXT': 'text',
    'MARKDOWN': 'markdown',
}

# Конфигурационные параметры по умолчанию
DEFAULT_CONFIG = {
    'general': {
        'log_level': 'WARNING',
    },
    'parser': {
        'source_name': DEFAULT_SOURCE_NAME,
        'schema_file_path': SCHEMA_FILE_PATH,
    },
    'output': {
        'format': 'json',
    },
}
