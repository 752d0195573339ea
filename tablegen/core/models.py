"""Data models for table schemas, generation settings and results."""

from typing import List, Dict, Any, Optional, Tuple, Union
from enum import Enum
from dataclasses import dataclass
from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr,
    field_validator,
)

from .validators import validate_column_name, validate_row_count, validate_table_name


class GeneratorKind(str, Enum):
    """Enumeration of supported value generators."""
    # Text
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    FULL_NAME = "fullName"
    EMAIL = "email"
    USERNAME = "username"
    PASSWORD = "password"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"
    WORD = "word"
    SLUG = "slug"

    # Numbers
    INTEGER = "integer"
    FLOAT = "float"
    PRICE = "price"
    PERCENTAGE = "percentage"
    RANGE = "range"

    # Dates
    DATE = "date"
    FUTURE_DATE = "futureDate"
    PAST_DATE = "pastDate"
    RECENT_DATE = "recentDate"
    TIMESTAMP = "timestamp"

    # Internet
    URL = "url"
    DOMAIN_NAME = "domainName"
    IP_ADDRESS = "ipAddress"
    USER_AGENT = "userAgent"
    UUID = "uuid"

    # Contact and address
    PHONE_NUMBER = "phoneNumber"
    STREET_ADDRESS = "streetAddress"
    CITY = "city"
    COUNTRY = "country"
    ZIP_CODE = "zipCode"
    STATE = "state"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"

    # Business and commerce
    COMPANY_NAME = "companyName"
    JOB_TITLE = "jobTitle"
    DEPARTMENT = "department"
    PRODUCT_NAME = "productName"
    PRODUCT_DESCRIPTION = "productDescription"
    CATEGORY = "category"

    # Media
    IMAGE_URL = "imageUrl"
    AVATAR_URL = "avatarUrl"

    # Other
    BOOLEAN = "boolean"
    JSON = "json"
    LITERAL = "literal"


class Dialect(str, Enum):
    """SQL dialects understood by the DDL/DML builders."""
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


class ExportFormat(str, Enum):
    """Supported file output formats."""
    JSON = "json"
    CSV = "csv"
    SQL = "sql"
    TYPESCRIPT = "typescript"
    PRISMA = "prisma"

    @property
    def extension(self) -> str:
        return {
            ExportFormat.JSON: ".json",
            ExportFormat.CSV: ".csv",
            ExportFormat.SQL: ".sql",
            ExportFormat.TYPESCRIPT: ".ts",
            ExportFormat.PRISMA: ".prisma",
        }[self]


DefaultValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

Row = Dict[str, Any]


class ColumnConstraints(BaseModel):
    """Declarative per-column constraints.

    Only ``null_probability``, ``default_value`` and ``min``/``max`` influence
    generation. The remaining flags are rendered into DDL and schema exports.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    primary_key: bool = Field(default=False, description="Render as PRIMARY KEY")
    unique: bool = Field(default=False, description="Render as UNIQUE")
    not_null: Optional[bool] = Field(default=None, description="Render as NOT NULL")
    default_value: Optional[DefaultValue] = Field(default=None, description="Column default")
    min: Optional[Union[int, float]] = Field(default=None, description="Lower numeric bound")
    max: Optional[Union[int, float]] = Field(default=None, description="Upper numeric bound")
    null_probability: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Probability of generating NULL"
    )

    @property
    def has_default(self) -> bool:
        return self.default_value is not None


class ColumnSpec(BaseModel):
    """A single column: name, generator kind and constraints.

    ``kind`` holds a :class:`GeneratorKind` when the value is known. Other
    strings are kept as-is and generate ``None``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: str = Field(default=GeneratorKind.WORD.value, validate_default=True)
    constraints: ColumnConstraints = Field(default_factory=ColumnConstraints)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_column_name(v)

    @field_validator("kind", mode="before")
    @classmethod
    def kind_to_str(cls, v):
        return v.value if isinstance(v, GeneratorKind) else v

    @field_validator("kind")
    @classmethod
    def resolve_kind(cls, v):
        try:
            return GeneratorKind(v)
        except ValueError:
            return v


class TableSchema(BaseModel):
    """A table name plus its ordered columns."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: Tuple[ColumnSpec, ...] = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_table_name(v)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def get_column(self, name: str) -> Optional[ColumnSpec]:
        """Get column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None


class GenerationConfig(BaseModel):
    """Configuration for a generation run."""

    row_count: int = Field(..., description="Number of rows to generate")
    locale: str = Field(default="en", description="Locale forwarded to Faker")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible data")
    batch_size: int = Field(default=1000, gt=0, description="Rows per chunk/transaction")

    @field_validator("row_count")
    @classmethod
    def check_row_count(cls, v):
        return validate_row_count(v)


class SchemaPreset(BaseModel):
    """A named, ready-made schema."""

    name: str
    description: str = ""
    schema_: TableSchema = Field(..., alias="schema")
    default_row_count: int = Field(default=100)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def table_schema(self) -> TableSchema:
        return self.schema_


@dataclass
class InsertResult:
    """Outcome of persisting rows into a database."""
    table_name: str
    rows_requested: int = 0
    committed_count: int = 0
    error: Optional[Exception] = None
    time_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.committed_count == self.rows_requested
