"""Constants for channel URL resolution and batch conversion."""

RSS_URL = "https://www.youtube.com/feeds/videos.xml?channel_id={channel_id}"
CHANNEL_URL = "https://www.youtube.com/{path}"
SHORT_URL = "https://youtu.be/{token}"

# Hosts that serve /channel/, /@handle, /c/ and /user/ pages
CHANNEL_HOSTS = frozenset({
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
})
SHORT_HOSTS = frozenset({"youtu.be", "www.youtu.be"})

# Browser-like so YouTube serves the full channel page
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Per-request timeout (in seconds)
FETCH_TIMEOUT = 15

# Simultaneous lookups in file mode
MAX_WORKERS = 10

# channels.txt -> channels_parsed.txt
OUTPUT_SUFFIX = "_parsed"

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"

APP_NAME = "ytrss"
APP_VERSION = "0.1.0"
