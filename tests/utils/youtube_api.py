"""
Fake YouTube Data API and raw resource builders for tests.
"""
from typing import Dict, List, Optional

import httpx

CHANNEL_ID = "UCtestchannel"
UPLOADS_ID = "UUtestuploads"
API_BASE = "https://youtube.test/v3"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_item(video_id: str, title: Optional[str] = None, thumbnails: Optional[dict] = None) -> dict:
    """Build a raw playlistItems resource."""
    if thumbnails is None:
        thumbnails = {
            "default": {"url": f"https://img.test/{video_id}/default.jpg"},
            "medium": {"url": f"https://img.test/{video_id}/medium.jpg"},
            "high": {"url": f"https://img.test/{video_id}/high.jpg"},
        }
    return {
        "snippet": {
            "title": title if title is not None else f"Video {video_id}",
            "description": f"Description of {video_id}",
            "publishedAt": "2024-05-01T12:00:00Z",
            "channelTitle": "Test Channel",
            "thumbnails": thumbnails,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
        },
        "contentDetails": {"videoId": video_id},
    }


def make_channel(subscribers: str = "3020", views: str = "135181", videos: str = "121") -> dict:
    """Build a raw channels.list response."""
    return {
        "items": [
            {
                "id": CHANNEL_ID,
                "snippet": {
                    "title": "Test Channel",
                    "description": "Security tutorials",
                    "thumbnails": {"default": {"url": "https://img.test/channel.jpg"}},
                },
                "statistics": {
                    "subscriberCount": subscribers,
                    "viewCount": views,
                    "videoCount": videos,
                },
                "contentDetails": {"relatedPlaylists": {"uploads": UPLOADS_ID}},
            }
        ]
    }


class FakeYouTubeAPI:
    """
    In-memory stand-in for the YouTube Data API, served through httpx.MockTransport.

    playlists maps a playlist id to its pages; each page is a list of raw items.
    Playlist ids in endless always return a next page token.
    """

    def __init__(self):
        self.channel: dict = make_channel()
        self.playlists: Dict[str, List[List[dict]]] = {}
        self.endless: set[str] = set()
        self.fail_status: Optional[int] = None
        self.fail_on_page: Optional[int] = None
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None and (
            self.fail_on_page is None or self.page_requests == self.fail_on_page
        ):
            return httpx.Response(self.fail_status, text="quotaExceeded")

        if request.url.path.endswith("/channels"):
            return httpx.Response(200, json=self.channel)

        playlist_id = request.url.params["playlistId"]
        if playlist_id in self.endless:
            token = request.url.params.get("pageToken") or "0"
            return httpx.Response(
                200,
                json={
                    "items": [make_item(f"{playlist_id}-{token}")],
                    "nextPageToken": str(int(token) + 1),
                },
            )

        pages = self.playlists.get(playlist_id, [[]])
        index = int(request.url.params.get("pageToken") or 0)
        body: dict = {"items": pages[index]}
        if index + 1 < len(pages):
            body["nextPageToken"] = str(index + 1)
        return httpx.Response(200, json=body)

    @property
    def page_requests(self) -> int:
        return sum(1 for r in self.requests if r.url.path.endswith("/playlistItems"))

    @property
    def channel_requests(self) -> int:
        return sum(1 for r in self.requests if r.url.path.endswith("/channels"))

    @property
    def call_count(self) -> int:
        return len(self.requests)
