"""
Shared fixtures: a patched requests.get and canned channel pages.
"""

from unittest.mock import MagicMock, patch

import pytest

CHANNEL_ID = "UCHnyfMqiRRG1u-2MsSQLbXA"

CHANNEL_PAGE = f"""
<html>
    <head>
        <link rel="canonical" href="https://www.youtube.com/channel/{CHANNEL_ID}">
        <link rel="alternate" type="application/rss+xml" title="RSS" href="https://www.youtube.com/feeds/videos.xml?channel_id={CHANNEL_ID}">
    </head>
    <body></body>
</html>
"""

EMPTY_PAGE = "<html><head><title>404 Not Found</title></head><body></body></html>"


def make_response(text="", url="https://www.youtube.com/@veritasium", status_error=None):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.text = text
    response.url = url
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


@pytest.fixture
def mock_get():
    """Patch requests.get as seen by the resolver."""
    with patch("ytrss.resolver.requests.get") as get:
        get.return_value = make_response(CHANNEL_PAGE)
        yield get
