from core.models import MediaQuery
from core.services.query_service import QueryService


def translate(**kwargs):
    return QueryService().translate(MediaQuery(**kwargs))


def test_defaults():
    q = translate()
    assert (q.page, q.per_page, q.order_by, q.query) == (1, 30, "latest", None)
    assert not q.is_search
    assert q.to_params() == {"page": 1, "per_page": 30, "order_by": "latest"}


def test_pagination_is_passed_through():
    q = translate(posts_per_page=20, paged=3)
    assert q.page == 3
    assert q.per_page == 20


def test_page_size_is_capped_at_api_limit():
    assert translate(posts_per_page=80).per_page == 30
    assert translate(posts_per_page=0).per_page == 1
    assert translate(paged=0).page == 1


def test_date_ordering():
    assert translate(orderby="date").order_by == "latest"
    assert translate(orderby="date", order="DESC").order_by == "latest"
    assert translate(orderby="date", order="asc").order_by == "oldest"


def test_unsupported_orderby_keeps_default():
    assert translate(orderby="title", order="asc").order_by == "latest"


def test_search_forces_relevance():
    q = translate(orderby="date", order="asc", s="mountains")
    assert q.is_search
    assert q.order_by == "relevant"
    assert q.to_params()["query"] == "mountains"


def test_blank_search_is_a_listing():
    q = translate(s="   ")
    assert not q.is_search
    assert q.order_by == "latest"


def test_from_args_is_tolerant():
    query = MediaQuery.from_args(
        {"posts_per_page": "-40", "paged": "two", "orderby": "date", "order": "asc", "s": "cat"}
    )
    assert query.posts_per_page == 40
    assert query.paged is None
    assert query.orderby == "date"
    assert query.search_term == "cat"
