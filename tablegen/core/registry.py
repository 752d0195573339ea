"""Value generator registry: maps a column's generator kind to one value."""

import logging
import random
from datetime import datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from faker import Faker
from faker.config import AVAILABLE_LOCALES

from .models import ColumnSpec, GeneratorKind


logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

DEFAULT_VALUE_PROBABILITY = 0.1

DEPARTMENTS = [
    "Books", "Movies", "Music", "Games", "Electronics", "Computers", "Home",
    "Garden", "Tools", "Grocery", "Health", "Beauty", "Toys", "Kids", "Baby",
    "Clothing", "Shoes", "Jewelery", "Sports", "Outdoors", "Automotive", "Industrial",
]

PRODUCT_ADJECTIVES = [
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Generic", "Handcrafted",
    "Handmade", "Licensed", "Refined", "Unbranded", "Tasty",
]

PRODUCT_MATERIALS = [
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Metal", "Soft", "Fresh", "Frozen", "Bronze", "Marble",
]

PRODUCT_NOUNS = [
    "Chair", "Car", "Computer", "Keyboard", "Mouse", "Bike", "Ball", "Gloves",
    "Pants", "Shirt", "Table", "Shoes", "Hat", "Towels", "Soap", "Tuna",
    "Chicken", "Fish", "Cheese", "Bacon", "Pizza", "Salad", "Sausages", "Chips",
]

# Default numeric bounds per kind: (min, max)
NUMERIC_BOUNDS: Dict[GeneratorKind, Tuple[float, float]] = {
    GeneratorKind.INTEGER: (0, 1000),
    GeneratorKind.FLOAT: (0, 1000),
    GeneratorKind.PRICE: (1, 1000),
    GeneratorKind.PERCENTAGE: (0, 100),
    GeneratorKind.RANGE: (0, 100),
}


def normalize_locale(locale: Optional[str]) -> str:
    """Map a locale tag such as ``en`` or ``pt-BR`` onto a Faker locale."""
    if not locale:
        return DEFAULT_LOCALE

    candidate = locale.replace("-", "_")
    if candidate == "en":
        return DEFAULT_LOCALE
    if candidate in AVAILABLE_LOCALES:
        return candidate

    # Bare language codes: pick the first region Faker knows for it
    for available in sorted(AVAILABLE_LOCALES):
        if available.split("_")[0] == candidate:
            return available

    logger.warning(f"Unknown locale {locale!r}, falling back to {DEFAULT_LOCALE}")
    return DEFAULT_LOCALE


def use_default_value(column: ColumnSpec, rng: random.Random) -> bool:
    """Decide whether to emit the column's declared default instead of a fresh value."""
    if not column.constraints.has_default:
        return False
    return rng.random() < DEFAULT_VALUE_PROBABILITY


def _reference_time() -> datetime:
    """Midnight UTC of the current day, so repeated runs see the same anchor."""
    today = datetime.now(timezone.utc).date()
    return datetime.combine(today, time())


class ValueGenerator:
    """Generates single column values from a reseedable randomness source.

    One ``Faker`` instance per generator owns the random state; every draw,
    including the null and default-value checks, goes through
    ``self.random`` so that ``reseed`` fully determines the next values.
    """

    def __init__(self, locale: str = "en", seed: Optional[int] = None,
                 reference_time: Optional[datetime] = None,
                 default_policy: Callable[[ColumnSpec, random.Random], bool] = use_default_value):
        self.locale = normalize_locale(locale)
        self.faker = Faker(self.locale)
        self.reference_time = reference_time or _reference_time()
        self.default_policy = default_policy
        self.reseed(seed if seed is not None else 0)

        self._generators: Dict[GeneratorKind, Callable[[ColumnSpec], Any]] = self._build_generators()

    @property
    def random(self) -> random.Random:
        return self.faker.random

    def reseed(self, seed: int) -> None:
        """Re-seed the underlying randomness source."""
        self.faker.seed_instance(seed)

    def generate(self, column: ColumnSpec) -> Any:
        """Generate a value for a single column."""
        constraints = column.constraints

        if self.random.random() < constraints.null_probability:
            return None

        if self.default_policy(column, self.random):
            return constraints.default_value

        generator = self._generators.get(column.kind)
        if generator is None:
            logger.debug(f"No generator registered for kind {column.kind!r} ({column.name}), returning NULL")
            return None

        return generator(column)

    def _build_generators(self) -> Dict[GeneratorKind, Callable[[ColumnSpec], Any]]:
        fake = self.faker
        return {
            GeneratorKind.FIRST_NAME: lambda c: fake.first_name(),
            GeneratorKind.LAST_NAME: lambda c: fake.last_name(),
            GeneratorKind.FULL_NAME: lambda c: fake.name(),
            GeneratorKind.EMAIL: lambda c: fake.email(),
            GeneratorKind.USERNAME: lambda c: fake.user_name(),
            GeneratorKind.PASSWORD: lambda c: fake.password(),
            GeneratorKind.SENTENCE: lambda c: fake.sentence(),
            GeneratorKind.PARAGRAPH: lambda c: fake.paragraph(),
            GeneratorKind.WORD: lambda c: fake.word(),
            GeneratorKind.SLUG: lambda c: fake.slug(),

            GeneratorKind.INTEGER: self._generate_integer,
            GeneratorKind.RANGE: self._generate_integer,
            GeneratorKind.FLOAT: self._generate_decimal,
            GeneratorKind.PRICE: self._generate_decimal,
            GeneratorKind.PERCENTAGE: self._generate_decimal,

            GeneratorKind.DATE: lambda c: self._recent().date().isoformat(),
            GeneratorKind.RECENT_DATE: lambda c: self._recent().date().isoformat(),
            GeneratorKind.PAST_DATE: lambda c: self._past().date().isoformat(),
            GeneratorKind.FUTURE_DATE: lambda c: self._future().date().isoformat(),
            GeneratorKind.TIMESTAMP: lambda c: self._format_timestamp(self._recent()),

            GeneratorKind.URL: lambda c: fake.url(),
            GeneratorKind.DOMAIN_NAME: lambda c: fake.domain_name(),
            GeneratorKind.IP_ADDRESS: lambda c: fake.ipv4(),
            GeneratorKind.USER_AGENT: lambda c: fake.user_agent(),
            GeneratorKind.UUID: lambda c: fake.uuid4(),

            GeneratorKind.PHONE_NUMBER: lambda c: fake.phone_number(),
            GeneratorKind.STREET_ADDRESS: lambda c: fake.street_address(),
            GeneratorKind.CITY: lambda c: fake.city(),
            GeneratorKind.COUNTRY: lambda c: fake.country(),
            GeneratorKind.ZIP_CODE: lambda c: fake.postcode(),
            GeneratorKind.STATE: lambda c: self._generate_state(),
            GeneratorKind.LATITUDE: lambda c: float(fake.latitude()),
            GeneratorKind.LONGITUDE: lambda c: float(fake.longitude()),

            GeneratorKind.COMPANY_NAME: lambda c: fake.company(),
            GeneratorKind.JOB_TITLE: lambda c: fake.job(),
            GeneratorKind.DEPARTMENT: lambda c: fake.random_element(DEPARTMENTS),
            GeneratorKind.CATEGORY: lambda c: fake.random_element(DEPARTMENTS),
            GeneratorKind.PRODUCT_NAME: lambda c: self._generate_product_name(),
            GeneratorKind.PRODUCT_DESCRIPTION: lambda c: fake.paragraph(nb_sentences=2),

            GeneratorKind.IMAGE_URL: lambda c: fake.image_url(),
            GeneratorKind.AVATAR_URL: lambda c: fake.image_url(width=128, height=128),

            GeneratorKind.BOOLEAN: lambda c: fake.pybool(),
            GeneratorKind.JSON: self._generate_json,
            GeneratorKind.LITERAL: lambda c: c.constraints.default_value,
        }

    def _bounds(self, column: ColumnSpec) -> Tuple[float, float]:
        default_min, default_max = NUMERIC_BOUNDS[column.kind]
        constraints = column.constraints

        if constraints.min is not None and constraints.max is not None:
            low, high = constraints.min, constraints.max
            # Inverted bounds are swapped rather than rejected
            if low > high:
                logger.debug(f"min > max for {column.name}, swapping bounds")
                low, high = high, low
            return low, high

        # A single declared bound always wins over the kind default
        if constraints.max is not None:
            return min(default_min, constraints.max), constraints.max
        if constraints.min is not None:
            return constraints.min, max(default_max, constraints.min)
        return default_min, default_max

    def _generate_integer(self, column: ColumnSpec) -> int:
        """Integers in the inclusive range, rounding fractional bounds inward."""
        low, high = self._bounds(column)
        low_int = int(-(-low // 1))
        high_int = int(high // 1)
        if low_int > high_int:
            return int(low)
        return self.random.randint(low_int, high_int)

    def _generate_decimal(self, column: ColumnSpec) -> float:
        low, high = self._bounds(column)
        return round(self.random.uniform(low, high), 2)

    def _recent(self) -> datetime:
        return self.faker.date_time_between(
            start_date=self.reference_time - timedelta(days=1), end_date=self.reference_time
        )

    def _past(self) -> datetime:
        return self.faker.date_time_between(
            start_date=self.reference_time - timedelta(days=365), end_date=self.reference_time
        )

    def _future(self) -> datetime:
        return self.faker.date_time_between(
            start_date=self.reference_time, end_date=self.reference_time + timedelta(days=365)
        )

    @staticmethod
    def _format_timestamp(value: datetime) -> str:
        return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"

    def _generate_state(self) -> str:
        # Not every Faker locale names its first-level subdivision "state"
        for method in ("state", "administrative_unit", "region", "prefecture"):
            provider = getattr(self.faker, method, None)
            if provider is not None:
                return provider()
        return self.faker.city()

    def _generate_product_name(self) -> str:
        fake = self.faker
        return " ".join([
            fake.random_element(PRODUCT_ADJECTIVES),
            fake.random_element(PRODUCT_MATERIALS),
            fake.random_element(PRODUCT_NOUNS),
        ])

    def _generate_json(self, column: ColumnSpec) -> Dict[str, Any]:
        return {
            "id": self.faker.uuid4(),
            "name": self.faker.name(),
            "value": self.random.randint(0, 100),
        }
