import pytest
import requests

ENDPOINT = "https://test.com/IndexNow"

CONFIG = {
    "engine": "test.com",
    "key": "test-key",
    "keyPath": "https://test-host.com/test-key-path",
    "host": "test-host.com",
    "batchSize": 100,
    "rateLimitDelay": 1000,
    "cacheTTL": 86400,
}


def http_error(status: int) -> requests.HTTPError:
    resp = requests.Response()
    resp.status_code = status
    return requests.HTTPError(f"{status} Server Error", response=resp)


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code


class FakeClient:
    """Records calls. `fail_posts` maps a POST index (0-based) to the exception to raise."""

    def __init__(self, pages=None, fail_posts=None):
        self.pages = dict(pages or {})
        self.fail_posts = dict(fail_posts or {})
        self.posts = []
        self.gets = []

    def post_json(self, url, payload):
        index = len(self.posts)
        self.posts.append((url, payload))
        if index in self.fail_posts:
            raise self.fail_posts[index]
        return FakeResponse(200)

    def get_text(self, url):
        self.gets.append(url)
        if url not in self.pages:
            raise http_error(404)
        return self.pages[url]

    @property
    def submitted(self):
        return [payload["urlList"] for _, payload in self.posts]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("INDEXNOW_ENGINE", "INDEXNOW_KEY", "INDEXNOW_HOST", "INDEXNOW_KEY_PATH",
                "INDEXNOW_BATCH_SIZE", "INDEXNOW_RATE_LIMIT", "INDEXNOW_CACHE_TTL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
