"""复合子句容器与排序构建器单元测试."""

import pytest

from esquery import (
    Filter,
    Must,
    MustNot,
    Should,
    Sort,
    ValidationError,
    bool_,
    exists,
    match,
    range_,
    term,
)


class TestBoolContainer:
    """Must / Should / MustNot / Filter 容器测试."""

    @pytest.mark.parametrize(
        "container_class, key",
        [(Must, "must"), (Should, "should"), (MustNot, "must_not"), (Filter, "filter")],
    )
    def test_key(self, container_class, key):
        """测试各容器导出的键."""
        clause = term("status", "active")
        assert container_class(clause).to_dict() == {key: [clause]}

    def test_add_keeps_call_order(self):
        """测试追加保持调用顺序."""
        a, b, c = match("title", "a"), match("title", "b"), exists("user")
        must = Must(a).add(b, c)
        assert must.to_dict() == {"must": [a, b, c]}

    def test_add_allows_duplicates(self):
        """测试允许重复子句."""
        a = match("title", "a")
        assert len(Must(a).add(a)) == 2

    def test_add_callable_splices(self):
        """测试函数参数被调用并展开."""
        should = Should(lambda: [term("tag", t) for t in ("a", "b")])
        assert should.to_dict() == {
            "should": [
                {"term": {"tag": {"value": "a"}}},
                {"term": {"tag": {"value": "b"}}},
            ]
        }

    def test_add_invalid_clause_is_atomic(self):
        """测试无效参数不会追加任何子句."""
        must = Must(match("title", "a"))
        with pytest.raises(ValidationError):
            must.add(exists("user"), {"a": 1, "b": 2})
        assert len(must) == 1

    def test_add_non_mapping(self):
        """测试非映射参数抛出异常."""
        with pytest.raises(ValidationError):
            Must("not a clause")

    def test_remove_after_add(self):
        """测试追加后按键删除，其余顺序不变."""
        a, b, c = match("title", "a"), term("status", "x"), exists("user")
        must = Must(a, b, c)
        must.add(range_("age >= 18"))
        must.remove("age")
        assert must.to_dict() == {"must": [a, b, c]}

    def test_remove_by_clause_type(self):
        """测试按子句类型删除."""
        must = Must(match("title", "a"), term("status", "x"), match("body", "b"))
        must.remove("match")
        assert must.to_dict() == {"must": [term("status", "x")]}

    def test_remove_by_dot_path(self):
        """测试按 子句类型.字段名 删除."""
        must = Must(match("title", "a"), term("title", "b"))
        must.remove("term.title")
        assert must.to_dict() == {"must": [match("title", "a")]}

    def test_remove_multiple_keys(self):
        """测试一次删除多个键."""
        must = Must(match("title", "a"), term("status", "x"), exists("user"))
        must.remove("title", "user")
        assert must.to_dict() == {"must": [term("status", "x")]}

    def test_remove_missing_key(self):
        """测试删除不存在的键不影响容器."""
        must = Must(match("title", "a"))
        must.remove("nothing")
        assert len(must) == 1

    def test_clause_copied_on_add(self):
        """测试追加时拷贝子句，修改原子句不影响容器."""
        clause = match("title", "a")
        must = Must(clause)
        clause["match"]["title"]["query"] = "changed"
        assert must.to_dict() == {"must": [match("title", "a")]}

    def test_to_dict_is_snapshot(self):
        """测试导出结果与容器互不影响."""
        must = Must(match("title", "a"))
        exported = must.to_dict()
        exported["must"].append(exists("user"))
        assert len(must) == 1

    def test_iteration(self):
        """测试迭代子句."""
        a, b = match("title", "a"), exists("user")
        assert list(Must(a, b)) == [a, b]


class TestBool:
    """bool_ 测试."""

    def test_must_and_should(self):
        """测试合并 must 和 should."""
        a, b = match("title", "a"), term("tag", "b")
        assert bool_(Must(a), Should(b)) == {"bool": {"must": [a], "should": [b]}}

    def test_last_write_wins(self):
        """测试同名键后者整体覆盖前者."""
        a, b = match("title", "a"), term("tag", "b")
        assert bool_(Must(a), Must(b)) == {"bool": {"must": [b]}}

    def test_scalar_modifiers(self):
        """测试 minimum_should_match 和 boost."""
        a = match("title", "a")
        result = bool_(Should(a), minimum_should_match=1, boost=1.5)
        assert result == {
            "bool": {"should": [a], "minimum_should_match": 1, "boost": 1.5}
        }

    def test_scalar_mapping(self):
        """测试以映射传入标量修饰."""
        a = match("title", "a")
        assert bool_(Should(a), {"minimum_should_match": 2}) == {
            "bool": {"should": [a], "minimum_should_match": 2}
        }

    def test_all_occurrences(self):
        """测试四种容器同时使用."""
        result = bool_(
            Must(match("title", "es")),
            Filter(term("status", "published")),
            Should(term("tag", "search")),
            MustNot(exists("deleted_at")),
        )
        assert list(result["bool"]) == ["must", "filter", "should", "must_not"]

    def test_snapshot_of_container(self):
        """测试组合后修改容器不影响 bool 子句."""
        must = Must(match("title", "a"))
        result = bool_(must)
        must.add(exists("user"))
        assert result == {"bool": {"must": [match("title", "a")]}}

    def test_nested_bool(self):
        """测试 bool 嵌套."""
        inner = bool_(Should(term("a", 1), term("b", 2)))
        outer = bool_(Must(inner))
        assert outer["bool"]["must"][0] == inner

    def test_invalid_expression(self):
        """测试非法参数."""
        with pytest.raises(ValidationError):
            bool_(42)


class TestSort:
    """Sort 测试."""

    def test_basic(self):
        """测试基本排序."""
        sort = Sort({"created": {"order": "desc"}}, "_score")
        assert sort.to_dict() == {"sort": [{"created": {"order": "desc"}}, "_score"]}

    def test_add_and_remove(self):
        """测试追加和按字段名删除."""
        sort = Sort({"created": "desc"}, "_score")
        sort.add({"age": "asc"})
        sort.remove("_score", "created")
        assert sort.to_list() == [{"age": "asc"}]

    def test_from_ordering(self):
        """测试从排序字段列表创建."""
        sort = Sort.from_ordering(["-create_time", "name"])
        assert sort.to_list() == [
            {"create_time": {"order": "desc"}},
            {"name": {"order": "asc"}},
        ]

    def test_invalid_spec(self):
        """测试非法排序规则."""
        with pytest.raises(ValidationError):
            Sort({"a": "asc", "b": "desc"})
