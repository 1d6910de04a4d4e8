import pytest

from bookmarks.models import GitHubIssue


def make_issue_payload(number=1, **overrides):
    payload = {
        "id": 1000 + number,
        "number": number,
        "title": f"[书签] Bookmark {number}",
        "body": f"## URL\nhttps://example.com/{number}\n## 描述\nDescription {number}\n## 标签\nalpha, beta",
        "html_url": f"https://github.com/owner/repo/issues/{number}",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
        "user": {"login": "octocat"},
        "labels": [{"name": "reading"}],
        "milestone": None,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def issue_payload():
    return make_issue_payload


@pytest.fixture
def make_issue():
    def _make(number=1, **overrides):
        return GitHubIssue.model_validate(make_issue_payload(number, **overrides))
    return _make
