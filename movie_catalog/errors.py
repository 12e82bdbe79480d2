"""
Exception types raised by the movie catalog.
"""

from typing import Optional


class CatalogError(Exception):
	"""Base class for catalog errors."""


class CatalogLoadError(CatalogError):
	"""The offline catalog document is missing, unreadable, or not a catalog. Fatal for the run."""


class PageFetchError(CatalogError):
	"""One source page could not be fetched or parsed. The sweep skips the page and continues."""

	def __init__(self, page: int, reason: str, status_code: Optional[int] = None):
		self.page = page
		self.reason = reason
		self.status_code = status_code
		super().__init__(f"page {page}: {reason}")
