"""
Scraper Service — fetch portfolio pages and turn them into plain text.

Responsibilities:
  • Fetch one page (scrape) or a few same-site pages (crawl) with httpx
  • Convert HTML to markdown-ish text with BeautifulSoup (headings, bullets, links kept)
  • Re-render JS-heavy pages with Playwright when the static HTML is nearly empty
  • Report blocked sites (403, bot challenges) separately from other failures
"""

from __future__ import annotations

import logging
from urllib.parse import urldefrag, urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from portfolio_resume.config import CRAWL_PAGE_LIMIT, settings
from portfolio_resume.exceptions import ExtractionSourceError
from portfolio_resume.models.resume_models import ScrapeMode
from portfolio_resume.utils.text_cleanup import normalize_text

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n---\n\n"

# Statuses that mean "this site refuses us", not "this site is down"
BLOCKED_STATUSES = {401, 403, 451}

# Static text shorter than this usually means a client-rendered SPA shell
MIN_STATIC_TEXT = 400

_DROP_TAGS = ["script", "style", "noscript", "svg", "template", "iframe", "canvas", "nav"]
_SKIP_EXTENSIONS = (
    ".pdf", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico",
    ".zip", ".mp4", ".mp3", ".css", ".js", ".xml", ".json",
)


# ── Public API ───────────────────────────────────────────────────────────────


async def extract_content(
    url: str,
    mode: ScrapeMode = ScrapeMode.SCRAPE,
    *,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Fetch a portfolio site and return its readable text.

    Returns "" when the site was reachable but had nothing readable.
    Raises ExtractionSourceError when the site can't be read at all.
    """
    if client is None:
        async with _make_client() as owned:
            return await _extract(owned, url, mode)
    return await _extract(client, url, mode)


def html_to_text(html: str, base_url: str | None = None) -> str:
    """Convert a page's HTML into markdown-ish plain text."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(_DROP_TAGS):
        tag.decompose()

    header_lines: list[str] = []
    meta = soup.find("meta", attrs={"name": "description"})
    if meta and meta.get("content"):
        header_lines.append(meta["content"].strip())

    # Links first so their targets survive the flattening below
    for a in soup.find_all("a"):
        label = a.get_text(" ", strip=True)
        href = _absolute_href(a.get("href"), base_url)
        if href and href.startswith("mailto:"):
            address = href[len("mailto:"):].split("?")[0]
            a.replace_with(address if not label or label == address else f"{label} ({address})")
        elif href and label and label != href:
            a.replace_with(f"{label} ({href})")

    for li in soup.find_all("li"):
        item = li.get_text(" ", strip=True)
        li.replace_with(f"\n- {item}\n" if item else "")

    for level in range(1, 7):
        for heading in soup.find_all(f"h{level}"):
            title = heading.get_text(" ", strip=True)
            heading.replace_with(f"\n\n{'#' * level} {title}\n\n" if title else "")

    body_text = soup.get_text("\n")
    text = "\n".join(header_lines + [body_text])
    return normalize_text(text)


def discover_links(html: str, base_url: str) -> list[str]:
    """Same-site page links in document order, without fragments or duplicates."""
    soup = BeautifulSoup(html, "html.parser")
    base_host = urlparse(base_url).netloc.lower()

    links: list[str] = []
    seen: set[str] = set()
    for a in soup.find_all("a", href=True):
        href = _absolute_href(a["href"], base_url)
        if not href:
            continue
        parsed = urlparse(href)
        if parsed.scheme not in ("http", "https") or parsed.netloc.lower() != base_host:
            continue
        if parsed.path.lower().endswith(_SKIP_EXTENSIONS):
            continue
        key = _page_key(href)
        if key not in seen:
            seen.add(key)
            links.append(href)
    return links


# ── Internals ────────────────────────────────────────────────────────────────


def _make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.scrape_timeout_seconds,
        headers={"User-Agent": settings.user_agent},
    )


async def _extract(client: httpx.AsyncClient, url: str, mode: ScrapeMode) -> str:
    logger.info(f"Extracting content from {url} (mode={mode.value})")

    first_html, final_url = await _fetch_page(client, url)
    texts = [await _page_text(first_html, final_url)]

    if mode == ScrapeMode.CRAWL:
        visited = {_page_key(url), _page_key(final_url)}
        for link in discover_links(first_html, final_url):
            if len(texts) >= CRAWL_PAGE_LIMIT:
                break
            if _page_key(link) in visited:
                continue
            visited.add(_page_key(link))
            try:
                html, page_url = await _fetch_page(client, link)
            except ExtractionSourceError as e:
                # Only the start page is mandatory when crawling
                logger.warning(f"Skipping {link}: {e.message}")
                continue
            texts.append(await _page_text(html, page_url))

    content = PAGE_SEPARATOR.join(t for t in texts if t)
    logger.info(f"Extracted {len(content)} chars from {len(texts)} page(s)")
    return content


async def _fetch_page(client: httpx.AsyncClient, url: str) -> tuple[str, str]:
    """GET a page; return (html, final url after redirects)."""
    try:
        resp = await client.get(url)
    except httpx.TimeoutException as e:
        raise ExtractionSourceError(
            f"Failed to scrape website: request to {url} timed out",
            details=str(e) or None,
        ) from e
    except httpx.HTTPError as e:
        raise ExtractionSourceError(f"Failed to scrape website: {e}") from e

    if resp.status_code in BLOCKED_STATUSES or resp.headers.get("cf-mitigated") == "challenge":
        raise ExtractionSourceError(
            "This website cannot be accessed",
            details=(
                "The website is protected or has restrictions that prevent scraping. "
                "Try using a different portfolio URL or a personal website."
            ),
            blocked=True,
        )
    if resp.status_code >= 400:
        raise ExtractionSourceError(
            f"Failed to scrape website: {url} returned HTTP {resp.status_code}"
        )

    return resp.text, str(resp.url)


async def _page_text(html: str, url: str) -> str:
    text = html_to_text(html, base_url=url)
    if len(text) >= MIN_STATIC_TEXT or not settings.render_js:
        return text

    logger.info(f"Static text for {url} is only {len(text)} chars, rendering with Playwright")
    try:
        rendered = await _render_with_playwright(url)
    except Exception as e:
        logger.warning(f"Playwright render failed for {url}: {e}. Using static text.")
        return text

    rendered_text = html_to_text(rendered, base_url=url)
    return rendered_text if len(rendered_text) > len(text) else text


async def _render_with_playwright(url: str) -> str:
    """Render a client-side app with headless Chromium and return the final HTML."""
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page(user_agent=settings.user_agent)
            timeout_ms = int(settings.scrape_timeout_seconds * 1000)
            await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            return await page.content()
        finally:
            await browser.close()


def _absolute_href(href: str | None, base_url: str | None) -> str | None:
    if not href:
        return None
    href = href.strip()
    if href.startswith(("javascript:", "tel:", "#")):
        return None
    if href.startswith("mailto:"):
        return href
    return urljoin(base_url, href) if base_url else href


def _page_key(url: str) -> str:
    """Identity for crawl dedup: no fragment, no trailing slash."""
    return urldefrag(url)[0].rstrip("/")
