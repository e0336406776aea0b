"""查询构建使用示例.

本示例展示如何使用 esquery 组合查询:
1. 叶子子句与 bool 组合
2. OrQuery / NotQuery 的追加与删除
3. 排序、分页与序列化
4. 交给 elasticsearch.dsl.Search 执行
"""

from esquery import (
    Filter,
    Must,
    MustNot,
    NotQuery,
    OrQuery,
    Query,
    QueryConfig,
    Should,
    Sort,
    bool_,
    es_query,
    exists,
    match,
    multi_match,
    nested,
    range_,
    term,
)


# ==================== 示例 1: bool 组合 ====================
def example_bool_query():
    """示例: 已发布、标题包含 elasticsearch、年龄在 18 到 65 之间的文档."""
    query = Query(
        bool_(
            Must(match("title", "elasticsearch")),
            Filter(term("status", "published"), range_("age >= 18 < 65")),
            Should(term("tags", "search"), term("tags", "lucene")),
            MustNot(exists("deleted_at")),
            minimum_should_match=1,
        )
    )
    query.from_(0).size(20)

    print("=" * 60)
    print("示例 1: bool 组合")
    print("=" * 60)
    print(query.to_json())


# ==================== 示例 2: OrQuery 追加与删除 ====================
def example_or_query():
    """示例: 动态追加 should 子句，再按字段名删除."""
    keywords = ["timeout", "refused", "reset"]

    query = OrQuery(
        lambda: [match("message", keyword) for keyword in keywords],
        multi_match("connection", ["title", "body^2"]),
        size=10,
    )
    query.add(term("level", "error"))
    query.remove("multi_match")

    print("=" * 60)
    print("示例 2: OrQuery")
    print("=" * 60)
    print(query.to_json())

    # 使用显式配置代替位置参数
    config = QueryConfig(expressions=[term("level", "warning")], from_=0, size=5)
    print(OrQuery.from_config(config).to_json())


# ==================== 示例 3: NotQuery 与排序 ====================
def example_not_query_with_sort():
    """示例: 排除已删除的文档并按创建时间倒序."""
    query = NotQuery(term("status", "deleted"), from_=0, size=50)
    query.add(nested("comments", {"query": term("comments.spam", True)}))

    sort = Sort.from_ordering(["-created", "title"])

    print("=" * 60)
    print("示例 3: NotQuery + Sort")
    print("=" * 60)
    print(es_query(query, sort))


# ==================== 示例 4: 交给 Search 执行 ====================
def example_to_search():
    """示例: 转换为 elasticsearch.dsl.Search，由客户端执行."""
    query = Query(match("title", "elasticsearch")).size(5)
    search = query.to_search(index="articles")

    print("=" * 60)
    print("示例 4: to_search")
    print("=" * 60)
    print(search.to_dict())
    # response = search.using(client).execute()


if __name__ == "__main__":
    example_bool_query()
    example_or_query()
    example_not_query_with_sort()
    example_to_search()
