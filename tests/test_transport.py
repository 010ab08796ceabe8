from unittest.mock import Mock

import pytest
import requests

from indexnow.transport import USER_AGENT, HttpClient

from conftest import http_error


def make_session(response):
    session = Mock()
    session.headers = {}
    session.post.return_value = response
    session.get.return_value = response
    return session


def test_post_json_sends_payload():
    resp = Mock(status_code=202)
    session = make_session(resp)
    client = HttpClient(timeout=5, session=session)
    assert client.post_json("https://e.com/IndexNow", {"urlList": ["u"]}) is resp
    session.post.assert_called_once_with(
        "https://e.com/IndexNow",
        json={"urlList": ["u"]},
        headers={"Content-Type": "application/json; charset=utf-8"},
        timeout=5,
    )
    resp.raise_for_status.assert_called_once()
    assert session.headers["User-Agent"] == USER_AGENT


def test_get_text_returns_body():
    resp = Mock(text="<urlset/>")
    client = HttpClient(session=make_session(resp))
    assert client.get_text("https://a.com/sitemap.xml") == "<urlset/>"
    client.session.get.assert_called_once_with("https://a.com/sitemap.xml", timeout=30)


def test_non_2xx_raises():
    resp = Mock()
    resp.raise_for_status.side_effect = http_error(403)
    client = HttpClient(session=make_session(resp))
    with pytest.raises(requests.HTTPError):
        client.post_json("https://e.com/IndexNow", {})
    with pytest.raises(requests.HTTPError):
        client.get_text("https://a.com/sitemap.xml")
