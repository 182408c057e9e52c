"""Expanded URIs parse as real URLs, and URL objects can be matched directly."""

import httpx

from wren.template.template import Template

ISSUES = Template("https://api.example.com/repos/{owner}/{repo}/issues{?state,labels}")


class TestExpandedURLs:
    def test_components(self) -> None:
        url = httpx.URL(
            ISSUES.expand(
                {"owner": "octo cat", "repo": "wren", "state": "open", "labels": ["bug", "ui"]}
            )
        )
        assert url.scheme == "https"
        assert url.host == "api.example.com"
        assert url.path == "/repos/octo cat/wren/issues"
        assert url.params["state"] == "open"
        assert url.params["labels"] == "bug,ui"

    def test_reserved_characters_stay_encoded(self) -> None:
        url = httpx.URL(ISSUES.expand({"owner": "a/b", "repo": "r?x"}))
        assert url.raw_path == b"/repos/a%2Fb/r%3Fx/issues"

    def test_match_url_object(self) -> None:
        url = httpx.URL("https://api.example.com/repos/octo/wren/issues?state=closed")
        result = ISSUES.match(url)
        assert result is not None
        assert result.bindings == {"owner": "octo", "repo": "wren", "state": "closed"}
