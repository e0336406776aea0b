"""构建器模块导出."""

from esquery.builders.compound import (
    BoolContainer,
    Filter,
    Must,
    MustNot,
    Should,
    Sort,
)
from esquery.builders.models import Paging, QueryConfig
from esquery.builders.query import BaseQuery, NotQuery, OrQuery, Query

__all__ = [
    "BoolContainer",
    "Must",
    "Should",
    "MustNot",
    "Filter",
    "Sort",
    "Paging",
    "QueryConfig",
    "BaseQuery",
    "Query",
    "OrQuery",
    "NotQuery",
]
