import pytest

from rumbling.database import DataRow, Queries, connect


@pytest.fixture
def queries():
    q = connect(":memory:")
    yield q
    q.db.close()


def test_insert_then_retrieve_round_trip(queries):
    queries.insert_data("www.hello.com/world", "good morning, nice weather today!")
    row = queries.retrieve_data("www.hello.com/world")
    assert row == DataRow(url="www.hello.com/world", content="good morning, nice weather today!")


def test_retrieve_missing_raises_lookup_error(queries):
    with pytest.raises(LookupError):
        queries.retrieve_data("www.hello.com/missing")


def test_retrieve_picks_matching_url(queries):
    queries.insert_data("a.example.com/one", "first page")
    queries.insert_data("a.example.com/two", "second page")
    assert queries.retrieve_data("a.example.com/two").content == "second page"
    assert queries.retrieve_data("a.example.com/one").content == "first page"


def test_insert_sets_timestamps(queries):
    queries.insert_data("www.hello.com/world", "content")
    created, updated = queries.db.execute(
        "SELECT created_at, updated_at FROM data WHERE url=?", ("www.hello.com/world",)
    ).fetchone()
    assert created and updated
    assert created == updated


def test_data_persists_across_connections(tmp_path):
    path = tmp_path / "store.db"
    first = connect(path)
    first.insert_data("www.hello.com/world", "wingstop basketball")
    first.db.close()

    second = connect(path)
    try:
        assert second.retrieve_data("www.hello.com/world").content == "wingstop basketball"
    finally:
        second.db.close()


def test_queries_wraps_existing_connection(queries):
    other = Queries(queries.db)
    other.insert_data("www.hello.com/x", "shared")
    assert queries.retrieve_data("www.hello.com/x").url == "www.hello.com/x"