"""
schema_sql: парсер DDL-схемы PostgreSQL (Application/Schema.sql) в AST.
"""

from .core.constants import VERSION
from .loader import parse_schema_sql, read_schema_file
from .parser import SQLParser

__version__ = VERSION

__all__ = [
    "SQLParser",
    "parse_schema_sql",
    "read_schema_file",
    "__version__",
]
