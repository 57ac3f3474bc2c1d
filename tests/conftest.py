"""Shared fixtures: a scripted navigator standing in for Chrome."""
import pytest

from review_scraper.errors import NavigationError

TARGET_URL = "https://www.tripadvisor.com/Hotel_Review-g1-d2-Reviews-Seaside_Inn.html"


def counter_page(count_label: str, with_link: bool = True, current_span: bool = False) -> str:
    """
    Target page with the language counter and pagination entries.

    With current_span the first entry is the site's current-page marker,
    a span with no href, as rendered on the live listing.
    """
    first = (
        '<span class="pageNum current">1</span>'
        if current_span else
        '<a class="pageNum" href="/Hotel_Review-g1-d2-Reviews-Seaside_Inn.html">1</a>'
    )
    link = (
        first + '<a class="pageNum" href="/Hotel_Review-g1-d2-Reviews-or5-Seaside_Inn.html">2</a>'
        if with_link else ""
    )
    return f"""
    <html><body>
      <div class="filters">
        <span class="ui_radio dQNlC">All languages (40)</span>
        <span class="ui_radio dQNlC">{count_label}</span>
      </div>
      <div class="pagination">{link}</div>
    </body></html>
    """


def review_page(*reviews: tuple[str, str]) -> str:
    """Review page with one title block and one quote per review."""
    blocks = "".join(
        f'<div class="review">'
        f'<div class="fCitC"><a href="#"><span>{title}</span></a></div>'
        f'<q class="XllAv"><span>{content}</span></q>'
        f"</div>"
        for title, content in reviews
    )
    return f"<html><body>{blocks}</body></html>"


class FakeNavigator:
    """In-memory navigator serving canned HTML per URL."""
    
    def __init__(self, pages: dict[str, str] | None = None, cookies=None, failing=()):
        self.pages = pages or {}
        self.cookies = list(cookies or [])
        self.failing = set(failing)
        self.visited: list[str] = []
        self.applied: list[dict] = []
        self.waits: list[int] = []
        self.closed = 0
        self._url = None
    
    def goto(self, url):
        if url in self.failing:
            raise NavigationError("net::ERR_CONNECTION_RESET", url=url)
        self.visited.append(url)
        self._url = url
    
    def wait_until_ready(self, timeout=None):
        pass
    
    def wait_fixed(self, duration_ms):
        self.waits.append(duration_ms)
    
    def current_url(self):
        return self._url
    
    def page_html(self):
        return self.pages.get(self._url, "<html><body></body></html>")
    
    def capture_cookies(self):
        return list(self.cookies)
    
    def apply_cookies(self, cookies):
        self.applied.extend(cookies)
    
    def close(self):
        self.closed += 1


@pytest.fixture
def sample_cookies():
    return [
        {
            "name": "TASession",
            "value": "V2ID.ABC123",
            "domain": ".tripadvisor.com",
            "path": "/",
            "secure": True,
            "httpOnly": False,
            "expiry": 1893456000,
            "sameSite": "Lax",
        },
        {
            "name": "OptanonConsent",
            "value": "isGpcEnabled=0&groups=C0001:1",
            "domain": ".tripadvisor.com",
            "path": "/",
            "secure": False,
            "httpOnly": False,
            "sameSite": "None",
        },
    ]
