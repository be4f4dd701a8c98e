"""Application expressions – filter predicates, date math and sort specs."""
from catalog_search.application.expressions.dates import DateMath
from catalog_search.application.expressions.nodes import (
    BoolGroup,
    ExactTerm,
    Expression,
    InSet,
    MatchAll,
    MatchText,
    Range,
    all_of,
    any_of,
    filtered,
    in_set,
    none_of,
)
from catalog_search.application.expressions.sort import SortDirection, SortField, SortSpec

__all__ = [
    "BoolGroup",
    "DateMath",
    "ExactTerm",
    "Expression",
    "InSet",
    "MatchAll",
    "MatchText",
    "Range",
    "SortDirection",
    "SortField",
    "SortSpec",
    "all_of",
    "any_of",
    "filtered",
    "in_set",
    "none_of",
]
