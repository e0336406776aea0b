"""工具函数与简写解析单元测试."""

import pytest

from esquery.core.range_shorthand import is_range_shorthand, parse_range_shorthand
from esquery.core.utils import (
    clause_fields,
    clause_type,
    matches_key,
    normalize_options,
    validate_query_string,
)
from esquery.exceptions import QueryStringParseError, RangeShorthandError


class TestNormalizeOptions:
    """normalize_options 测试."""

    def test_none(self):
        """测试 None 视为空选项."""
        assert normalize_options(None, "query") == {}

    def test_scalar(self):
        """测试裸标量包装."""
        assert normalize_options("hello", "query") == {"query": "hello"}
        assert normalize_options(0, "value") == {"value": 0}

    def test_mapping_is_copied(self):
        """测试映射被拷贝."""
        options = {"query": "a"}
        result = normalize_options(options, "query")
        result["extra"] = 1
        assert options == {"query": "a"}


class TestParseRangeShorthand:
    """parse_range_shorthand 测试."""

    def test_plain_field(self):
        """测试不含操作符的字段名原样返回."""
        assert parse_range_shorthand("age") == ("age", {})
        assert not is_range_shorthand("age")

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("age > 1", {"gt": "1"}),
            ("age < 1", {"lt": "1"}),
            ("age >= 1", {"gte": "1"}),
            ("age <= 1", {"lte": "1"}),
        ],
    )
    def test_single_operator(self, expression, expected):
        """测试单个操作符映射."""
        assert parse_range_shorthand(expression) == ("age", expected)

    def test_both_inclusive_bounds(self):
        """测试闭区间."""
        assert parse_range_shorthand("price >= 10 <= 99.5") == (
            "price",
            {"gte": "10", "lte": "99.5"},
        )

    def test_repeated_operator_last_wins(self):
        """测试重复操作符以最后一次为准."""
        assert parse_range_shorthand("age > 1 > 2") == ("age", {"gt": "2"})

    def test_dotted_field(self):
        """测试带点号的字段名."""
        assert parse_range_shorthand("stats.count > 5") == ("stats.count", {"gt": "5"})

    def test_dangling_operator(self):
        """测试操作符后缺少值."""
        with pytest.raises(RangeShorthandError, match="Cannot parse"):
            parse_range_shorthand("age >=")

    def test_missing_field(self):
        """测试缺少字段名."""
        with pytest.raises(RangeShorthandError, match="missing a field name"):
            parse_range_shorthand(">= 18")


class TestClauseFields:
    """clause_fields 测试."""

    def test_field_keyed_clause(self):
        """测试字段名作为键的子句."""
        assert clause_fields({"match": {"title": {"query": "es"}}}) == ["title"]

    def test_clause_level_options_excluded(self):
        """测试排除子句级别选项."""
        clause = {"terms": {"status": ["a", "b"], "boost": 2}}
        assert clause_fields(clause) == ["status"]

    def test_exists(self):
        """测试 exists 子句."""
        assert clause_fields({"exists": {"field": "user"}}) == ["user"]

    def test_nested(self):
        """测试 nested 子句."""
        assert clause_fields({"nested": {"path": "comments", "query": {}}}) == [
            "comments"
        ]

    def test_multi_match(self):
        """测试 multi_match 子句."""
        clause = {"multi_match": {"query": "fox", "fields": ["title", "body"]}}
        assert clause_fields(clause) == ["title", "body"]

    def test_query_string_default_field(self):
        """测试 query_string 的 default_field."""
        clause = {"query_string": {"query": "fox", "default_field": "content"}}
        assert clause_fields(clause) == ["content"]

    def test_fieldless(self):
        """测试没有字段名的子句."""
        assert clause_fields({"ids": {"values": ["1"]}}) == []
        assert clause_fields({"bool": {"must": []}}) == []

    def test_clause_type(self):
        """测试获取子句类型."""
        assert clause_type({"range": {"age": {"gt": 1}}}) == "range"


class TestMatchesKey:
    """matches_key 删除键匹配测试."""

    clause = {"range": {"age": {"gte": "18"}}}

    def test_match_by_clause_type(self):
        """测试按子句类型匹配."""
        assert matches_key(self.clause, "range")

    def test_match_by_field(self):
        """测试按字段名匹配."""
        assert matches_key(self.clause, "age")

    def test_match_by_dot_path(self):
        """测试按 子句类型.字段名 匹配."""
        assert matches_key(self.clause, "range.age")

    def test_dot_path_with_wrong_type(self):
        """测试子句类型不同的点路径不匹配."""
        assert not matches_key(self.clause, "term.age")

    def test_unrelated_key(self):
        """测试无关的键不匹配."""
        assert not matches_key(self.clause, "height")

    def test_dotted_field_name(self):
        """测试字段名本身包含点号."""
        clause = {"term": {"user.name": {"value": "kimchy"}}}
        assert matches_key(clause, "user.name")
        assert matches_key(clause, "term.user.name")
        assert not matches_key(clause, "user")

    def test_option_key_does_not_match(self):
        """测试子句级别选项名不会被当作字段名."""
        clause = {"terms": {"status": ["a"], "boost": 2}}
        assert not matches_key(clause, "boost")


class TestValidateQueryString:
    """validate_query_string 测试."""

    def test_valid(self):
        """测试合法语句原样返回."""
        assert validate_query_string('title: "foo bar" AND body: fox') == (
            'title: "foo bar" AND body: fox'
        )

    def test_blank_and_wildcard(self):
        """测试空语句和 * 不做解析."""
        assert validate_query_string("") == ""
        assert validate_query_string("*") == "*"

    def test_invalid(self):
        """测试非法语句抛出异常."""
        with pytest.raises(QueryStringParseError, match="Failed to parse"):
            validate_query_string("title: (foo OR")
