import unittest
from unittest.mock import patch

import httpx

from portfolio_resume.config import CRAWL_PAGE_LIMIT, settings
from portfolio_resume.exceptions import ExtractionSourceError
from portfolio_resume.models.resume_models import ScrapeMode
from portfolio_resume.services.scraper_service import (
    PAGE_SEPARATOR,
    discover_links,
    extract_content,
    html_to_text,
)

HOME = """
<html>
  <head>
    <title>Ada Lovelace</title>
    <meta name="description" content="Portfolio of Ada Lovelace, programmer.">
    <style>body { color: red; }</style>
  </head>
  <body>
    <nav><a href="/about">About</a> <a href="/projects#top">Projects</a> <a href="/cv.pdf">CV</a></nav>
    <h1>Ada Lovelace</h1>
    <p>Reach me at <a href="mailto:ada@example.dev">ada@example.dev</a></p>
    <h2>Skills</h2>
    <ul><li>Go</li><li>Rust</li></ul>
    <a href="https://github.com/ada/note-g">Note G</a>
    <p>More in <a href="/projects">my projects</a>.</p>
    <footer><a href="https://twitter.com/ada">Twitter</a></footer>
    <script>window.secret = "do not scrape";</script>
  </body>
</html>
"""

ABOUT = "<html><body><h1>About</h1><p>Lead Programmer at Analytical Engines Ltd.</p></body></html>"
PROJECTS = "<html><body><h1>Projects</h1><p>Note G computes Bernoulli numbers.</p></body></html>"


def _client(routes: dict[str, httpx.Response]) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        response = routes.get(request.url.path)
        if response is None:
            return httpx.Response(404, text="not found")
        return response

    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://example.dev")


class HtmlToTextTests(unittest.TestCase):
    def test_keeps_structure_and_drops_scripts(self):
        text = html_to_text(HOME, base_url="https://example.dev/")
        self.assertIn("# Ada Lovelace", text)
        self.assertIn("## Skills", text)
        self.assertIn("- Go", text)
        self.assertIn("- Rust", text)
        self.assertIn("Portfolio of Ada Lovelace, programmer.", text)
        self.assertIn("Note G (https://github.com/ada/note-g)", text)
        self.assertIn("ada@example.dev", text)
        self.assertNotIn("do not scrape", text)
        self.assertNotIn("color: red", text)

    def test_relative_links_are_made_absolute(self):
        text = html_to_text(HOME, base_url="https://example.dev/")
        self.assertIn("my projects (https://example.dev/projects)", text)

    def test_nav_menu_is_dropped_but_footer_kept(self):
        text = html_to_text(HOME, base_url="https://example.dev/")
        self.assertNotIn("About (https://example.dev/about)", text)
        self.assertNotIn("CV", text)
        self.assertIn("Twitter (https://twitter.com/ada)", text)

    def test_discover_links_same_site_only(self):
        links = discover_links(HOME, "https://example.dev/")
        self.assertEqual(links, ["https://example.dev/about", "https://example.dev/projects#top"])


class ExtractContentTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = patch.object(settings, "render_js", False)
        patcher.start()
        self.addCleanup(patcher.stop)

    async def test_single_page(self):
        async with _client({"/": httpx.Response(200, html=HOME)}) as client:
            text = await extract_content("https://example.dev/", ScrapeMode.SCRAPE, client=client)
        self.assertIn("Ada Lovelace", text)
        self.assertNotIn(PAGE_SEPARATOR, text)

    async def test_crawl_reads_linked_pages_up_to_limit(self):
        routes = {
            "/": httpx.Response(200, html=HOME),
            "/about": httpx.Response(200, html=ABOUT),
            "/projects": httpx.Response(200, html=PROJECTS),
        }
        async with _client(routes) as client:
            text = await extract_content("https://example.dev/", ScrapeMode.CRAWL, client=client)

        pages = text.split(PAGE_SEPARATOR)
        self.assertEqual(len(pages), CRAWL_PAGE_LIMIT)
        self.assertIn("Analytical Engines", pages[1])
        self.assertIn("Bernoulli", pages[2])

    async def test_crawl_skips_broken_secondary_pages(self):
        routes = {
            "/": httpx.Response(200, html=HOME),
            "/about": httpx.Response(500, text="boom"),
            "/projects": httpx.Response(200, html=PROJECTS),
        }
        async with _client(routes) as client:
            text = await extract_content("https://example.dev/", ScrapeMode.CRAWL, client=client)
        self.assertEqual(len(text.split(PAGE_SEPARATOR)), 2)

    async def test_forbidden_is_reported_as_blocked(self):
        async with _client({"/": httpx.Response(403, text="Forbidden")}) as client:
            with self.assertRaises(ExtractionSourceError) as ctx:
                await extract_content("https://example.dev/", client=client)
        self.assertTrue(ctx.exception.blocked)
        self.assertEqual(ctx.exception.error_type, "blocklisted")
        self.assertEqual(ctx.exception.status_code, 403)

    async def test_bot_challenge_is_reported_as_blocked(self):
        challenge = httpx.Response(200, html="<html></html>", headers={"cf-mitigated": "challenge"})
        async with _client({"/": challenge}) as client:
            with self.assertRaises(ExtractionSourceError) as ctx:
                await extract_content("https://example.dev/", client=client)
        self.assertTrue(ctx.exception.blocked)

    async def test_server_error_is_not_blocked(self):
        async with _client({"/": httpx.Response(503, text="down")}) as client:
            with self.assertRaises(ExtractionSourceError) as ctx:
                await extract_content("https://example.dev/", client=client)
        self.assertFalse(ctx.exception.blocked)
        self.assertEqual(ctx.exception.error_type, "source_unavailable")

    async def test_connection_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with self.assertRaises(ExtractionSourceError):
                await extract_content("https://example.dev/", client=client)

    async def test_empty_page_returns_empty_string(self):
        async with _client({"/": httpx.Response(200, html="<html><body><script>x()</script></body></html>")}) as client:
            text = await extract_content("https://example.dev/", client=client)
        self.assertEqual(text, "")


if __name__ == "__main__":
    unittest.main()
