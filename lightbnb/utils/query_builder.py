"""
Predicate builder for the filtered property search.
Filters are collected as an ordered list of (key, clause) entries and folded
into a single SELECT, so clause order is deterministic and every caller value
is a bound parameter.
"""

from sqlalchemy import select, and_, func
from sqlalchemy.engine import Dialect
from sqlalchemy.sql.expression import ColumnElement, Select
from sqlalchemy.dialects.postgresql.asyncpg import PGDialect_asyncpg
from lightbnb.models.property import Property, PropertyReview
from lightbnb.schemas.property import PropertySearchFilters
from typing import Any, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

# Insert column order for properties
PROPERTY_FIELDS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
    "country",
    "street",
    "city",
    "province",
    "post_code",
)

PROPERTY_COLUMNS = (Property.id,) + tuple(getattr(Property, name) for name in PROPERTY_FIELDS)


@dataclass(frozen=True)
class SearchPredicate:
    """One search condition. Aggregate conditions belong in HAVING."""
    key: str
    clause: ColumnElement
    aggregate: bool = False


class PredicateBuilder:
    """
    Ordered collection of search predicates.
    Row predicates fold into WHERE, joined with AND in insertion order;
    aggregate predicates fold into HAVING the same way.
    """

    def __init__(self):
        self._predicates: List[SearchPredicate] = []

    def add(self, key: str, clause: ColumnElement, aggregate: bool = False) -> "PredicateBuilder":
        self._predicates.append(SearchPredicate(key, clause, aggregate))
        return self

    def __iter__(self) -> Iterator[SearchPredicate]:
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)

    @property
    def keys(self) -> List[str]:
        return [predicate.key for predicate in self._predicates]

    @property
    def row_predicates(self) -> List[ColumnElement]:
        return [p.clause for p in self._predicates if not p.aggregate]

    @property
    def aggregate_predicates(self) -> List[ColumnElement]:
        return [p.clause for p in self._predicates if p.aggregate]

    def apply(self, query: Select) -> Select:
        """
        Fold the collected predicates into a query.

        Args:
            query: SELECT to constrain

        Returns:
            The query with WHERE and HAVING clauses added where needed
        """
        rows = self.row_predicates
        if rows:
            query = query.where(and_(*rows))

        aggregates = self.aggregate_predicates
        if aggregates:
            query = query.having(and_(*aggregates))

        return query


def to_cents(amount: Union[Decimal, int, float, str]) -> int:
    """Convert a whole-currency amount to integer cents."""
    cents = Decimal(str(amount)) * 100
    return int(cents.to_integral_value(rounding=ROUND_HALF_UP))


def average_rating_expression() -> ColumnElement:
    return func.avg(PropertyReview.rating)


def build_property_filters(
    filters: PropertySearchFilters,
    average_rating: Optional[ColumnElement] = None
) -> PredicateBuilder:
    """
    Build search predicates in the fixed check order:
    city, owner_id, minimum price, maximum price, minimum rating.

    Args:
        filters: Search criteria; unset fields are skipped
        average_rating: Aggregate expression the rating bound applies to

    Returns:
        PredicateBuilder holding the applicable predicates
    """
    if average_rating is None:
        average_rating = average_rating_expression()

    builder = PredicateBuilder()

    # Case-sensitive substring match
    if filters.city is not None:
        builder.add("city", Property.city.like(f"%{filters.city}%"))

    if filters.owner_id is not None:
        builder.add("owner_id", Property.owner_id == filters.owner_id)

    # Callers give whole units, the column stores cents
    if filters.minimum_price_per_night is not None:
        builder.add(
            "minimum_price_per_night",
            Property.cost_per_night >= to_cents(filters.minimum_price_per_night)
        )

    if filters.maximum_price_per_night is not None:
        builder.add(
            "maximum_price_per_night",
            Property.cost_per_night <= to_cents(filters.maximum_price_per_night)
        )

    if filters.minimum_rating is not None:
        builder.add("minimum_rating", average_rating >= filters.minimum_rating, aggregate=True)

    return builder


def build_property_search_query(filters: PropertySearchFilters, limit: int) -> Select:
    """
    Build the property search SELECT.

    Properties are inner-joined to their reviews, grouped per property with
    the average rating, ordered by nightly cost and capped at limit.
    """
    average_rating = average_rating_expression()

    query = (
        select(*PROPERTY_COLUMNS, average_rating.label("average_rating"))
        .join(PropertyReview, Property.id == PropertyReview.property_id)
    )

    query = build_property_filters(filters, average_rating).apply(query)

    return (
        query
        .group_by(Property.id)
        .order_by(Property.cost_per_night)
        .limit(limit)
    )


def describe_statement(statement: Select, dialect: Optional[Dialect] = None) -> Tuple[str, Any]:
    """
    Render a statement for debug logging.

    Args:
        statement: Statement to render
        dialect: Dialect to compile for, PostgreSQL/asyncpg by default

    Returns:
        Tuple of (SQL text, bound parameters). Parameters are a list ordered
        by placeholder number for positional dialects, a dict otherwise.
    """
    compiled = statement.compile(dialect=dialect or PGDialect_asyncpg())
    params = compiled.params
    if compiled.positional and compiled.positiontup:
        return str(compiled), [params[name] for name in compiled.positiontup]
    return str(compiled), dict(params)
