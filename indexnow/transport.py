"""HTTP capability used by the submitter: POST JSON, GET text."""

import requests

USER_AGENT = "Mozilla/5.0 (compatible; indexnow-submitter/1.0)"


class HttpClient:
    """Thin requests wrapper. Non-2xx responses raise requests.HTTPError."""

    def __init__(self, timeout: int = 30, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def post_json(self, url: str, payload: dict) -> requests.Response:
        resp = self.session.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json; charset=utf-8"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp

    def get_text(self, url: str) -> str:
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    def close(self):
        self.session.close()
