"""
Pagination for the post listing pages.
"""

import math
from typing import Dict, List, NamedTuple, Sequence, Union

PAGE_SIZE = 20
WINDOW = 2
ELLIPSIS = '…'


class PaginationState(NamedTuple):
    page_size: int
    total_items: int
    total_pages: int
    current_page: int


class Paginator:
    """Split an ordered sequence into fixed-size listing pages."""

    def __init__(self, total_items: int, page_size: int = PAGE_SIZE, base_path: str = '/posts/'):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.total_items = max(0, total_items)
        self.page_size = page_size
        self.base_path = base_path if base_path.endswith('/') else base_path + '/'

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.page_size))

    def _check_page(self, page_num: int) -> None:
        if not 1 <= page_num <= self.total_pages:
            raise ValueError(f"Page {page_num} is outside 1..{self.total_pages}")

    def state(self, current_page: int) -> PaginationState:
        self._check_page(current_page)
        return PaginationState(self.page_size, self.total_items, self.total_pages, current_page)

    def page_slice(self, items: Sequence, page_num: int) -> Sequence:
        """Return the items shown on ``page_num``."""
        self._check_page(page_num)
        start = (page_num - 1) * self.page_size
        return items[start:start + self.page_size]

    def page_url(self, page_num: int) -> str:
        if page_num <= 1:
            return self.base_path
        return f"{self.base_path}page/{page_num}/"

    def page_numbers(self, current_page: int) -> List[Union[int, str]]:
        """
        Returns a list of page numbers (or ellipses) to display in pagination.
        Always shows page 1 and the last page.
        Shows two pages before and after the current page.
        Inserts an ellipsis wherever the numbers skip.
        """
        self._check_page(current_page)
        pages = {1, self.total_pages}
        for n in range(current_page - WINDOW, current_page + WINDOW + 1):
            if 1 <= n <= self.total_pages:
                pages.add(n)

        links = []
        last = 0
        for n in sorted(pages):
            if last and n - last > 1:
                links.append(ELLIPSIS)
            links.append(n)
            last = n
        return links

    def links(self, current_page: int) -> List[Dict]:
        """
        Navigation entries for ``current_page``.

        Each entry has a ``kind`` of ``link``, ``current`` or ``gap``. A single
        page of results gets no navigation at all.
        """
        if self.total_pages <= 1:
            return []

        entries = []
        if current_page > 1:
            entries.append({'kind': 'link', 'label': 'Prev', 'url': self.page_url(current_page - 1)})

        for n in self.page_numbers(current_page):
            if n == ELLIPSIS:
                entries.append({'kind': 'gap', 'label': ELLIPSIS, 'url': None})
            elif n == current_page:
                entries.append({'kind': 'current', 'label': str(n), 'url': None})
            else:
                entries.append({'kind': 'link', 'label': str(n), 'url': self.page_url(n)})

        if current_page < self.total_pages:
            entries.append({'kind': 'link', 'label': 'Next', 'url': self.page_url(current_page + 1)})
        return entries
