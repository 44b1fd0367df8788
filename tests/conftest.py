"""Shared fixtures for schema_sql tests."""

from __future__ import annotations

import pytest

from schema_sql.parser import SQLParser, Scanner


@pytest.fixture
def parser() -> SQLParser:
    return SQLParser({"source_name": "schema.sql"})


@pytest.fixture
def parse(parser):
    """parse("...") -> list of statements."""
    return parser.parse


def make_scanner(text: str) -> Scanner:
    scanner = Scanner(text, "test.sql")
    scanner.skip_leading()
    return scanner


SAMPLE_SCHEMA = """\
-- Your database schema. Use the Schema Designer at http://localhost:8001/ to add some tables.
CREATE EXTENSION IF NOT EXISTS "uuid-ossp";

CREATE TYPE mood AS ENUM ('happy', 'sad');

/* users of the app */
CREATE TABLE users (
    id UUID DEFAULT uuid_generate_v4() PRIMARY KEY NOT NULL,
    email TEXT NOT NULL UNIQUE,
    current_mood mood
);

// posts
CREATE TABLE posts (
    id UUID DEFAULT uuid_generate_v4() PRIMARY KEY NOT NULL,
    author_id UUID NOT NULL,
    title TEXT DEFAULT 'untitled'
);

ALTER TABLE posts ADD CONSTRAINT posts_ref_author FOREIGN KEY (author_id) REFERENCES users (id) ON DELETE CASCADE;
"""


@pytest.fixture
def sample_schema() -> str:
    return SAMPLE_SCHEMA
