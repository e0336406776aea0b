"""查询体序列化单元测试."""

import json

import pytest

from esquery import (
    Must,
    OrQuery,
    Query,
    Sort,
    ValidationError,
    bool_,
    build,
    build_query,
    elastic_search_query,
    es_query,
    match,
    merge_expressions,
    range_,
    serialize,
    term,
)


class TestSerialize:
    """serialize 测试."""

    def test_compact_output(self):
        """测试紧凑输出，无缩进和多余空格."""
        assert serialize({"query": {"match_all": {}}, "size": 1}) == (
            '{"query":{"match_all":{}},"size":1}'
        )

    def test_non_ascii_kept(self):
        """测试非 ASCII 字符不转义."""
        assert serialize({"query": {"match": {"标题": "搜索"}}}) == (
            '{"query":{"match":{"标题":"搜索"}}}'
        )

    def test_idempotent(self):
        """测试同一查询体多次序列化结果一致."""
        query = Query(bool_(Must(match("title", "es"), range_("age > 10 < 20"))))
        tree = query.to_dict()
        assert serialize(tree) == serialize(tree)
        assert query.to_json() == query.to_json()

    def test_unserializable(self):
        """测试无法序列化的值."""
        with pytest.raises(ValidationError):
            serialize({"query": object()})


class TestEsQuery:
    """es_query 测试."""

    def test_query_with_paging(self):
        """测试分页查询的序列化结果只包含数据字段."""
        result = json.loads(es_query(Query(match("title", "es")).from_(10).size(5)))
        assert result == {
            "query": {"match": {"title": {"query": "es"}}},
            "from": 10,
            "size": 5,
        }

    def test_drops_function_valued_handle(self):
        """测试首个值为函数的映射被整体丢弃."""
        a = {"query": match("title", "es")}
        b = {"add": lambda *args: None, "sort": ["_score"]}
        assert json.loads(es_query(a, b)) == a

    def test_drops_callable_entries(self):
        """测试映射中的函数值不会出现在输出中."""
        a = {"query": match("title", "es"), "helper": lambda: None}
        assert json.loads(es_query(a)) == {"query": match("title", "es")}

    def test_merge_order(self):
        """测试按参数顺序合并，后者覆盖前者."""
        first = {"query": match("title", "a")}
        second = {"query": term("status", "b")}
        assert merge_expressions(first, second) == second

    def test_query_and_sort(self):
        """测试合并查询与排序."""
        body = es_query(
            OrQuery(match("title", "es"), size=10),
            Sort({"created": "desc"}),
        )
        assert body == (
            '{"query":{"bool":{"should":[{"match":{"title":{"query":"es"}}}]}},'
            '"size":10,"sort":[{"created":"desc"}]}'
        )

    def test_empty_mapping_skipped(self):
        """测试空映射被跳过."""
        assert es_query({}, {"size": 0}) == '{"size":0}'

    def test_invalid_argument(self):
        """测试非法参数."""
        with pytest.raises(ValidationError):
            es_query("query")

    def test_aliases(self):
        """测试别名."""
        assert build_query is es_query
        assert build is es_query
        assert elastic_search_query is es_query
