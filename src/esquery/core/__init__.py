"""核心模块导出."""

from esquery.core.clauses import (
    bool_,
    combined_fields,
    exists,
    field,
    fuzzy,
    ids,
    match,
    match_bool_prefix,
    match_phrase,
    match_phrase_prefix,
    multi_match,
    nested,
    prefix,
    query_string,
    range_,
    regexp,
    simple_query_string,
    term,
    terms,
    wildcard,
)
from esquery.core.constants import ClauseTypes, OptionKeys, QueryBodyKeys
from esquery.core.expression import Expression, resolve_clause, resolve_expression
from esquery.core.operators import BoolOccurrence, RangeOperator, SortOrder
from esquery.core.range_shorthand import parse_range_shorthand
from esquery.core.utils import (
    clause_fields,
    clause_type,
    matches_key,
    normalize_options,
    validate_query_string,
)

__all__ = [
    "ClauseTypes",
    "OptionKeys",
    "QueryBodyKeys",
    "BoolOccurrence",
    "RangeOperator",
    "SortOrder",
    "Expression",
    "resolve_clause",
    "resolve_expression",
    "parse_range_shorthand",
    "clause_fields",
    "clause_type",
    "matches_key",
    "normalize_options",
    "validate_query_string",
    # 叶子子句
    "match",
    "match_bool_prefix",
    "match_phrase",
    "match_phrase_prefix",
    "multi_match",
    "combined_fields",
    "query_string",
    "simple_query_string",
    "exists",
    "fuzzy",
    "ids",
    "prefix",
    "term",
    "terms",
    "range_",
    "regexp",
    "wildcard",
    "nested",
    "field",
    # 复合子句
    "bool_",
]
