"""
Fetch the remote catalog and persist it as an offline snapshot.

This script:
1) Sweeps the TMDB popular list page by page (bad pages are skipped)
2) Deduplicates movies by id
3) Writes {"results": [...]} to the catalog file

Usage:
    TMDB_API_KEY=... python -m scripts.fetch_catalog [pages] [workers]

After running this once, the CLI and the API can work offline from the snapshot.
"""

import sys  # command line arguments
import time  # measure step timings

from loguru import logger  # console logging

from movie_catalog.config import Settings  # env-driven settings
from movie_catalog.data_loader import DataLoader  # snapshot writer
from movie_catalog.fetcher import CatalogFetcher  # paged sweep
from movie_catalog.page_source import TMDBPageSource  # remote source


def main(argv=None):
	argv = sys.argv[1:] if argv is None else argv
	settings = Settings.from_env()
	pages = int(argv[0]) if len(argv) > 0 else settings.total_pages
	workers = int(argv[1]) if len(argv) > 1 else 4

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Fetch Movie Catalog Snapshot")
	logger.info("=" * 60)

	# 1) Sweep
	logger.info(f"[1/2] Sweeping {pages} pages with {workers} workers...")
	t0 = time.time()
	fetcher = CatalogFetcher(TMDBPageSource(settings))
	catalog = fetcher.fetch_all(pages, max_workers=workers)
	logger.info(f"[OK] {len(catalog)} unique movies in {time.time() - t0:.2f}s")

	# 2) Save
	logger.info(f"[2/2] Writing {settings.catalog_file}...")
	DataLoader().save_movies_to_json(catalog.movies(), settings.catalog_file)
	logger.info("[OK] Saved.")
	logger.info("=" * 60)


if __name__ == '__main__':
	main()
