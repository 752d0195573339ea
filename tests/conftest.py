"""Test configuration and fixtures for TableGen tests."""

import pytest
import tempfile
import os

from tablegen.core.database import SQLiteTarget
from tablegen.core.models import ColumnConstraints, ColumnSpec, GeneratorKind, TableSchema


@pytest.fixture
def temp_db_file():
    """Create a temporary database file for SQLite testing."""
    fd, path = tempfile.mkstemp(suffix='.db')
    os.close(fd)
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def sqlite_target(temp_db_file):
    return SQLiteTarget(file_path=temp_db_file)


@pytest.fixture
def users_schema():
    """users(id: uuid not-null unique, age: integer 0..5, email: email)."""
    return TableSchema(
        name="users",
        columns=[
            ColumnSpec(
                name="id",
                kind=GeneratorKind.UUID,
                constraints=ColumnConstraints(not_null=True, unique=True),
            ),
            ColumnSpec(
                name="age",
                kind=GeneratorKind.INTEGER,
                constraints=ColumnConstraints(min=0, max=5),
            ),
            ColumnSpec(name="email", kind=GeneratorKind.EMAIL),
        ],
    )


@pytest.fixture
def strict_users_schema():
    """Same columns as ``users_schema`` with ``email`` declared NOT NULL."""
    return TableSchema(
        name="users",
        columns=[
            ColumnSpec(
                name="id",
                kind=GeneratorKind.UUID,
                constraints=ColumnConstraints(not_null=True, unique=True),
            ),
            ColumnSpec(
                name="age",
                kind=GeneratorKind.INTEGER,
                constraints=ColumnConstraints(min=0, max=5),
            ),
            ColumnSpec(
                name="email",
                kind=GeneratorKind.EMAIL,
                constraints=ColumnConstraints(not_null=True),
            ),
        ],
    )


@pytest.fixture
def mixed_schema():
    """A schema touching every value type: text, numbers, booleans, JSON, dates."""
    return TableSchema(
        name="accounts",
        columns=[
            ColumnSpec(
                name="id",
                kind=GeneratorKind.UUID,
                constraints=ColumnConstraints(primary_key=True, not_null=True),
            ),
            ColumnSpec(name="full_name", kind=GeneratorKind.FULL_NAME,
                       constraints=ColumnConstraints(not_null=True)),
            ColumnSpec(name="balance", kind=GeneratorKind.PRICE),
            ColumnSpec(name="score", kind=GeneratorKind.INTEGER,
                       constraints=ColumnConstraints(min=1, max=10)),
            ColumnSpec(name="is_active", kind=GeneratorKind.BOOLEAN),
            ColumnSpec(name="profile", kind=GeneratorKind.JSON),
            ColumnSpec(name="bio", kind=GeneratorKind.SENTENCE,
                       constraints=ColumnConstraints(null_probability=0.3)),
            ColumnSpec(name="signed_up", kind=GeneratorKind.PAST_DATE),
        ],
    )
