"""
parser package: разбор DDL-схемы в AST
"""

from .sql_parser import SQLParser
from .tokenizer import Scanner, Backtrack, Cut
from .expressions import parse_expression, parse_sql_type
from .fragments import statement_fragment, statement_spans

__all__ = [
    "SQLParser",
    "Scanner",
    "Backtrack",
    "Cut",
    "parse_expression",
    "parse_sql_type",
    "statement_fragment",
    "statement_spans",
]
