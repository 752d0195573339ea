"""Built-in schema presets and lookup across custom presets."""

import logging
from typing import List, Optional

from .config import Settings
from .models import ColumnConstraints, ColumnSpec, GeneratorKind, SchemaPreset, TableSchema


logger = logging.getLogger(__name__)


def _column(name: str, kind: GeneratorKind, **constraints) -> ColumnSpec:
    return ColumnSpec(name=name, kind=kind, constraints=ColumnConstraints(**constraints))


BUILTIN_PRESETS: List[SchemaPreset] = [
    SchemaPreset(
        name="users",
        description="User accounts with contact details",
        default_row_count=100,
        schema=TableSchema(name="users", columns=[
            _column("id", GeneratorKind.UUID, primary_key=True, not_null=True),
            _column("first_name", GeneratorKind.FIRST_NAME, not_null=True),
            _column("last_name", GeneratorKind.LAST_NAME, not_null=True),
            _column("email", GeneratorKind.EMAIL, unique=True, not_null=True),
            _column("username", GeneratorKind.USERNAME, unique=True, not_null=True),
            _column("phone", GeneratorKind.PHONE_NUMBER, null_probability=0.1),
            _column("is_active", GeneratorKind.BOOLEAN, default_value=True),
            _column("created_at", GeneratorKind.TIMESTAMP, not_null=True),
        ]),
    ),
    SchemaPreset(
        name="products",
        description="Product catalog with prices and categories",
        default_row_count=50,
        schema=TableSchema(name="products", columns=[
            _column("id", GeneratorKind.UUID, primary_key=True, not_null=True),
            _column("name", GeneratorKind.PRODUCT_NAME, not_null=True),
            _column("description", GeneratorKind.PRODUCT_DESCRIPTION),
            _column("price", GeneratorKind.PRICE, not_null=True, min=1, max=500),
            _column("category", GeneratorKind.CATEGORY),
            _column("stock", GeneratorKind.INTEGER, min=0, max=1000, default_value=0),
            _column("image_url", GeneratorKind.IMAGE_URL),
        ]),
    ),
    SchemaPreset(
        name="orders",
        description="Customer orders with totals and status",
        default_row_count=200,
        schema=TableSchema(name="orders", columns=[
            _column("id", GeneratorKind.UUID, primary_key=True, not_null=True),
            _column("customer_email", GeneratorKind.EMAIL, not_null=True),
            _column("total", GeneratorKind.PRICE, min=5, max=2000),
            _column("status", GeneratorKind.LITERAL, default_value="pending"),
            _column("shipping_address", GeneratorKind.STREET_ADDRESS),
            _column("city", GeneratorKind.CITY),
            _column("ordered_at", GeneratorKind.PAST_DATE, not_null=True),
        ]),
    ),
    SchemaPreset(
        name="companies",
        description="Companies with industry contacts",
        default_row_count=50,
        schema=TableSchema(name="companies", columns=[
            _column("id", GeneratorKind.UUID, primary_key=True, not_null=True),
            _column("name", GeneratorKind.COMPANY_NAME, not_null=True),
            _column("website", GeneratorKind.URL),
            _column("department", GeneratorKind.DEPARTMENT),
            _column("country", GeneratorKind.COUNTRY),
            _column("employees", GeneratorKind.RANGE, min=1, max=5000),
        ]),
    ),
    SchemaPreset(
        name="events",
        description="Web analytics events",
        default_row_count=500,
        schema=TableSchema(name="events", columns=[
            _column("id", GeneratorKind.UUID, primary_key=True, not_null=True),
            _column("ip_address", GeneratorKind.IP_ADDRESS),
            _column("user_agent", GeneratorKind.USER_AGENT),
            _column("url", GeneratorKind.URL),
            _column("payload", GeneratorKind.JSON),
            _column("occurred_at", GeneratorKind.TIMESTAMP, not_null=True),
        ]),
    ),
]


def all_presets(settings: Optional[Settings] = None) -> List[SchemaPreset]:
    """Built-in presets followed by custom presets from settings."""
    custom = settings.custom_presets if settings else []
    return BUILTIN_PRESETS + list(custom)


def get_preset(name: str, settings: Optional[Settings] = None) -> Optional[SchemaPreset]:
    """Find a preset by name; built-in presets win over custom ones."""
    for preset in all_presets(settings):
        if preset.name == name:
            return preset
    logger.debug(f"Preset {name!r} not found")
    return None


def get_preset_names(settings: Optional[Settings] = None) -> List[str]:
    return [preset.name for preset in all_presets(settings)]
