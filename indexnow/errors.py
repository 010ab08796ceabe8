"""Error taxonomy for IndexNow submission."""


class IndexNowError(Exception):
    pass


class ConfigError(IndexNowError):
    """Raised at construction when required fields are missing or out of range."""

    def __init__(self, missing: list[str] | None = None, problems: list[str] | None = None):
        self.missing = list(missing or [])
        self.problems = list(problems or [])
        parts = []
        if self.missing:
            parts.append(f"Missing required config: {', '.join(self.missing)}")
        parts.extend(self.problems)
        super().__init__("; ".join(parts) or "Invalid config")


class SubmissionError(IndexNowError):
    """A batch POST failed. `status` is None when no response came back."""

    def __init__(self, message: str, urls: list[str], status: int | None = None):
        super().__init__(message)
        self.urls = list(urls)
        self.status = status


class ParseError(IndexNowError):
    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source
