import pytest

from conftest import FakeResponse
from core.models import UnsplashQuery
from infrastructure.settings import ProviderConfig
from infrastructure.unsplash_client import UnsplashClient


@pytest.fixture
def client(config, session, tracker_session):
    c = UnsplashClient(config, session=session, tracker_session=tracker_session)
    yield c
    c.close()


def test_fetch_photos_sends_credentials(client, session):
    session.reply(FakeResponse([{"id": "a"}]))
    result = client.fetch_photos(UnsplashQuery(page=2))

    assert result is not None
    assert result.data == [{"id": "a"}]
    assert result.headers["X-Total"] == "10000"
    call = session.calls[0]
    assert call["url"] == "https://api.unsplash.com/photos"
    assert call["params"] == {"page": 2, "per_page": 30, "order_by": "latest"}
    assert call["headers"] == {"Accept-Version": "v1", "Authorization": "Client-ID test-key"}
    assert call["timeout"] == 10.0


def test_search_photos_uses_search_endpoint(client, session):
    session.reply(FakeResponse({"total": 1, "total_pages": 1, "results": []}))
    result = client.search_photos(UnsplashQuery(order_by="relevant", query="dog"))
    assert result.data["total"] == 1
    assert session.calls[0]["url"] == "https://api.unsplash.com/search/photos"
    assert session.calls[0]["params"]["query"] == "dog"


def test_transport_error_is_no_result(client, session, request_error):
    session.reply(request_error)
    assert client.fetch("/photos") is None


def test_non_json_body_is_no_result(client, session):
    session.reply(FakeResponse(body="<html>Bad gateway</html>", status_code=502))
    assert client.fetch("/photos") is None


def test_error_status_with_json_is_returned(client, session):
    session.reply(FakeResponse({"errors": ["OAuth error"]}, status_code=401))
    result = client.fetch("/photos")
    assert result.status_code == 401
    assert result.data == {"errors": ["OAuth error"]}


def test_missing_key_still_sends_request(session):
    client = UnsplashClient(ProviderConfig(), session=session)
    session.reply(FakeResponse([]))
    client.fetch("/photos")
    client.close()
    assert session.calls[0]["headers"]["Authorization"] == "Client-ID "


def test_track_download_is_fire_and_forget(client, session, tracker_session):
    tracker_session.reply(FakeResponse({"url": "https://images.unsplash.com/x"}))
    assert client.track_download("abc") is None
    client.close()
    assert tracker_session.calls[0]["url"] == "https://api.unsplash.com/photos/abc/download"
    assert tracker_session.calls[0]["headers"]["Authorization"] == "Client-ID test-key"
    assert tracker_session.closed
    assert session.closed


def test_downloads_do_not_share_the_listing_session(client, session, tracker_session):
    session.reply(FakeResponse([]))
    client.fetch_photos(UnsplashQuery())
    client.track_download("abc")
    client.close()
    assert [call["url"] for call in session.calls] == ["https://api.unsplash.com/photos"]
    assert [call["url"] for call in tracker_session.calls] == [
        "https://api.unsplash.com/photos/abc/download"
    ]


def test_track_download_swallows_failures(client, tracker_session, request_error):
    tracker_session.reply(request_error)
    client.track_download("abc")
    client.close()
    assert len(tracker_session.calls) == 1


def test_track_download_after_close_is_ignored(config, session, tracker_session):
    client = UnsplashClient(config, session=session, tracker_session=tracker_session)
    client.close()
    client.track_download("abc")
    assert tracker_session.calls == []
