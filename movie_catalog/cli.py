"""
Movie catalog - command line entry point.

Loads the catalog (offline snapshot or remote sweep), applies the criteria
given as options, saves or prints the results, and then hands over to the
interactive session unless results were saved to a file.
"""

import argparse  # option parsing
import sys  # streams and exit codes
from typing import Iterable, List, Optional, Sequence, TextIO  # type hints

from loguru import logger  # console logging

from .config import Settings  # env-driven settings
from .criteria_parser import CriteriaParser  # genre list parsing
from .data_loader import DataLoader  # offline snapshot loader
from .errors import CatalogLoadError  # fatal load failure
from .fetcher import CatalogFetcher  # remote sweep
from .interactive import InteractiveSession, SessionContext  # interactive loop
from .models import FilterCriteria, Movie  # data classes
from .page_source import TMDBPageSource  # remote page source
from .presenter import print_results, write_results  # output

EPILOG = """
Examples:
  movie-catalog --catalog-file data/movies.json --min-vote-average 7 --genre-ids action,28
  movie-catalog --source api --pages 20 --workers 4 --title star --output-file stars.txt

Set TMDB_API_KEY before using --source api.
"""

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_LOAD_FAILED = 2


def configure_logging(level: str) -> None:
	"""Send log records to stderr at the given level."""
	logger.remove()
	logger.add(sys.stderr, level=level.upper())


def build_parser(settings: Settings) -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog='movie-catalog',
		description="Browse, filter and export a movie catalog",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog=EPILOG,
	)

	source = parser.add_argument_group('catalog source')
	source.add_argument('--source', choices=['file', 'api'], default='file', help="Load the snapshot file or sweep the remote API")
	source.add_argument('--catalog-file', default=str(settings.catalog_file), help="Snapshot document with a 'results' array")
	source.add_argument('--pages', type=int, default=settings.total_pages, help="Number of API pages to sweep")
	source.add_argument('--workers', type=int, default=1, help="Concurrent page fetches during the sweep")

	criteria = parser.add_argument_group('criteria')
	criteria.add_argument('--title', help="Title contains (case-insensitive)")
	criteria.add_argument('--partial-title', help="Title contains (case-insensitive)")
	criteria.add_argument('--vote-average', type=float, help="Vote average within +/- 0.1")
	criteria.add_argument('--min-vote-average', type=float)
	criteria.add_argument('--max-vote-average', type=float)
	criteria.add_argument('--genre-ids', help="Comma-separated genre ids or names, matches any")
	criteria.add_argument('--release-date', help="Release date contains")
	criteria.add_argument('--release-date-after', help="Release date strictly after (string comparison)")
	criteria.add_argument('--release-date-before', help="Release date strictly before (string comparison)")

	output = parser.add_argument_group('output')
	output.add_argument('--output-file', help="Save results to this file instead of starting a session")
	output.add_argument('--all-details', action='store_true', help="Show every field instead of titles only")
	output.add_argument('--no-interactive', action='store_true', help="Exit after printing results")
	output.add_argument('--log-level', default=settings.log_level, help="DEBUG, INFO, WARNING, ERROR")
	return parser


def criteria_from_args(args: argparse.Namespace, criteria_parser: CriteriaParser) -> FilterCriteria:
	"""Build criteria from parsed options. Raises ValueError on an unknown genre."""
	return FilterCriteria(
		title=args.title,
		partial_title=args.partial_title,
		exact_vote_average=args.vote_average,
		min_vote_average=args.min_vote_average,
		max_vote_average=args.max_vote_average,
		genre_ids=criteria_parser.parse_genres(args.genre_ids) if args.genre_ids else None,
		release_date=args.release_date,
		release_date_after=args.release_date_after,
		release_date_before=args.release_date_before,
	)


def load_catalog(args: argparse.Namespace, settings: Settings) -> List[Movie]:
	"""Load every movie from the chosen source. Raises CatalogLoadError when nothing can be produced."""
	if args.source == 'file':
		return DataLoader().load_movies_from_json(args.catalog_file)
	try:
		source = TMDBPageSource(settings)
	except ValueError as e:
		raise CatalogLoadError(str(e)) from e
	catalog = CatalogFetcher(source).fetch_all(args.pages, max_workers=args.workers)
	return catalog.movies()


def main(argv: Optional[Sequence[str]] = None, lines: Optional[Iterable[str]] = None, output: Optional[TextIO] = None) -> int:
	settings = Settings.from_env()
	parser = build_parser(settings)
	args = parser.parse_args(argv)
	configure_logging(args.log_level)
	output = output or sys.stdout

	criteria_parser = CriteriaParser()
	try:
		criteria = criteria_from_args(args, criteria_parser)
	except ValueError as e:
		parser.error(f"--genre-ids: {e}")  # exits with status 2

	try:
		movies = load_catalog(args, settings)
	except CatalogLoadError as e:
		logger.error(f"[CLI] {e}")
		output.write(f"Could not load the movie catalog: {e}\n")
		return EXIT_LOAD_FAILED

	context = SessionContext(all_movies=movies, criteria=criteria, full_details=args.all_details)
	context.refilter()

	if args.output_file:
		if not write_results(context.results, args.output_file, full_details=True):
			output.write(f"Could not save results to: {args.output_file}\n")
			return EXIT_WRITE_FAILED
		output.write(f"Results saved to: {args.output_file}\n")
		return EXIT_OK

	if args.no_interactive:
		print_results(context.results, stream=output, full_details=args.all_details)
		return EXIT_OK

	InteractiveSession(context, lines=lines, output=output, parser=criteria_parser).run()
	return EXIT_OK


if __name__ == '__main__':
	sys.exit(main())
