"""序列化器模块导出."""

from esquery.serializers.body import (
    build,
    build_query,
    elastic_search_query,
    es_query,
    merge_expressions,
    serialize,
)

__all__ = [
    "serialize",
    "merge_expressions",
    "es_query",
    "build_query",
    "build",
    "elastic_search_query",
]
