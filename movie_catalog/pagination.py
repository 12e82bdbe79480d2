"""
Pagination controller.
Groups contiguous blocks of source-API pages into user-facing UI pages.
"""

from typing import List, Optional  # type hints

from loguru import logger  # console logger

from .config import DEFAULT_PAGES_PER_UI_PAGE, DEFAULT_TOTAL_PAGES  # paging defaults
from .fetcher import CatalogFetcher  # fetches a block of source pages
from .models import Movie  # catalog entry


class PaginationController:
	"""
	UI page p covers source pages [(p-1)*size + 1, p*size].
	Navigation past either end is a no-op, not an error.
	"""

	def __init__(self, pages_per_ui_page: int = DEFAULT_PAGES_PER_UI_PAGE, total_source_pages: int = DEFAULT_TOTAL_PAGES):
		if pages_per_ui_page < 1:
			raise ValueError("pages_per_ui_page must be positive")
		if total_source_pages < 1:
			raise ValueError("total_source_pages must be positive")
		self.pages_per_ui_page = pages_per_ui_page
		self.total_source_pages = total_source_pages
		self.current_page = 1

	@property
	def total_ui_pages(self) -> int:
		return max(1, self.total_source_pages // self.pages_per_ui_page)

	def source_pages(self, ui_page: Optional[int] = None) -> range:
		"""Source pages covered by a UI page (the current one by default)."""
		page = self.current_page if ui_page is None else ui_page
		if not 1 <= page <= self.total_ui_pages:
			raise ValueError(f"UI page {page} out of range 1..{self.total_ui_pages}")
		start = (page - 1) * self.pages_per_ui_page + 1
		end = min(page * self.pages_per_ui_page, self.total_source_pages)
		return range(start, end + 1)

	@property
	def has_previous(self) -> bool:
		return self.current_page > 1

	@property
	def has_next(self) -> bool:
		return self.current_page < self.total_ui_pages

	def previous(self) -> bool:
		"""Step back one UI page. Returns False (and stays put) on the first page."""
		if not self.has_previous:
			return False
		self.current_page -= 1
		return True

	def next(self) -> bool:
		"""Step forward one UI page. Returns False (and stays put) on the last page."""
		if not self.has_next:
			return False
		self.current_page += 1
		return True

	def go_to(self, ui_page: int) -> bool:
		if not 1 <= ui_page <= self.total_ui_pages:
			return False
		self.current_page = ui_page
		return True

	def load(self, fetcher: CatalogFetcher) -> List[Movie]:
		"""Fetch the current UI page's block of source pages afresh."""
		pages = self.source_pages()
		logger.info(f"[Pages] Loading UI page {self.current_page}/{self.total_ui_pages} (source pages {pages.start}-{pages.stop - 1})")
		return fetcher.fetch_pages(pages)
