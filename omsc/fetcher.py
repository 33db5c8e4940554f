"""Wiki page fetching and HTML table parsing."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence

import requests
from bs4 import BeautifulSoup

from .constants import BASE_URL, EDITION_COLUMN
from .models import HistoryRow

logger = logging.getLogger('omsc.fetcher')

HEADERS = {
    'User-Agent': 'omsc-stats/1.0 (+https://onlinemusicsongcontest.miraheze.org)',
}


class FetchError(RuntimeError):
    """A source page could not be retrieved."""

    def __init__(self, url: str, reason: str):
        super().__init__(f'Failed to fetch {url}: {reason}')
        self.url = url
        self.reason = reason


class WikiFetcher:
    """
    Fetches raw page HTML from the contest wiki.

    requests.Session is not thread-safe, so each worker thread gets its own
    session from session_factory.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        workers: int = 4,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.workers = workers
        self.session_factory = session_factory
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The calling thread's session, created on first use."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self.session_factory()
            session.headers.update(HEADERS)
            self._local.session = session
        return session

    def page_url(self, page: str) -> str:
        """Resolve a page identifier to its URL."""
        return self.base_url + page

    def fetch_page(self, page: str) -> str:
        """
        Fetch one page.

        Raises:
            FetchError: On transport failure or a non-2xx response
        """
        url = self.page_url(page)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f'Error fetching {url}: {e}')
            raise FetchError(url, str(e)) from e
        logger.debug(f'Fetched {len(resp.text)} characters from {url}')
        return resp.text

    def fetch_pages(self, pages: Sequence[str]) -> dict[str, str]:
        """
        Fetch several pages concurrently.

        Any single failure aborts the whole batch.

        Returns:
            Dict mapping page identifier to HTML, in request order
        """
        unique = list(dict.fromkeys(pages))
        if self.workers > 1 and len(unique) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                texts = list(executor.map(self.fetch_page, unique))
        else:
            texts = [self.fetch_page(page) for page in unique]
        logger.info(f'Fetched {len(unique)} pages')
        return dict(zip(unique, texts))


def _header_texts(row) -> list[str]:
    headers: list[str] = []
    seen: dict[str, int] = {}
    for th in row.find_all('th'):
        text = th.get_text(' ', strip=True)
        seen[text] = seen.get(text, 0) + 1
        headers.append(text if seen[text] == 1 else f'{text}_{seen[text]}')
    return headers


def _parse_table(table) -> tuple[list[str], list[dict[str, str]]]:
    rows = table.find_all('tr')
    if not rows:
        return [], []
    headers = _header_texts(rows[0])

    parsed: list[dict[str, str]] = []
    for row in rows[1:]:
        if not row.find('td'):
            continue
        texts = [cell.get_text(' ', strip=True) for cell in row.find_all(['td', 'th'])]
        texts += [''] * (len(headers) - len(texts))
        parsed.append(dict(zip(headers, texts)))
    return headers, parsed


def parse_history_tables(html: str) -> list[list[HistoryRow]]:
    """Parse only the tables with an Edition column, as HistoryRows."""
    soup = BeautifulSoup(html, 'html.parser')
    history: list[list[HistoryRow]] = []
    for table in soup.find_all('table'):
        headers, rows = _parse_table(table)
        if EDITION_COLUMN not in headers:
            continue
        history.append([HistoryRow(edition=row[EDITION_COLUMN], cells=row) for row in rows])
    return history
