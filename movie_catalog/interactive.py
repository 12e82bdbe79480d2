"""
Interactive session.
A line-oriented finite-state loop: manage favorites, optionally save, optionally
refine the criteria and re-filter, until the user saves or stops refining.
Input is any iterable of lines and output any text stream, so the loop is not
tied to a terminal.
"""

import sys  # default streams
from dataclasses import dataclass, field  # session context
from enum import Enum  # loop states
from typing import Callable, Dict, Iterable, Iterator, List, Optional, TextIO  # type hints

from rapidfuzz import process, fuzz  # "did you mean" suggestions

from loguru import logger  # console logging

from .criteria_parser import CriteriaParser  # keyword/value parsing
from .favorites import FavoritesSet  # identity-keyed favorites
from .filter_engine import filter_movies  # re-filtering after refinement
from .models import FilterCriteria, Movie  # data classes
from .presenter import format_favorites, print_results, write_results  # rendering

# Minimum WRatio for suggesting a title when a lookup fails
SUGGESTION_THRESHOLD = 80

YES = {'yes', 'y'}
NO = {'no', 'n'}


class State(Enum):
	AWAITING_FAVORITES_COMMAND = 'favorites-command'
	AWAITING_FAVORITE_TITLE = 'favorite-title'
	AWAITING_SAVE_CHOICE = 'save-choice'
	AWAITING_FILE_NAME = 'file-name'
	AWAITING_REFINE_CHOICE = 'refine-choice'
	AWAITING_CRITERIA_KEYWORD = 'criteria-keyword'
	AWAITING_CRITERIA_VALUE = 'criteria-value'
	DONE = 'done'


@dataclass
class SessionContext:
	"""Everything one session works on, passed around explicitly."""
	all_movies: List[Movie]  # full catalog; refinements always filter from here
	criteria: FilterCriteria = field(default_factory=FilterCriteria)
	favorites: FavoritesSet = field(default_factory=FavoritesSet)
	results: List[Movie] = field(default_factory=list)  # current filtered view
	full_details: bool = False  # display mode
	saved_to: Optional[str] = None  # file the results were saved to, if any

	def refilter(self) -> List[Movie]:
		self.results = filter_movies(self.all_movies, self.criteria)
		return self.results


class InteractiveSession:
	"""Drives the state machine over a stream of input lines."""

	PROMPTS = {
		State.AWAITING_FAVORITES_COMMAND: "Do you want to manage favorite movies? (add, remove, list, done)",
		State.AWAITING_SAVE_CHOICE: "Do you want to save the results to a file? (yes/no)",
		State.AWAITING_FILE_NAME: "Enter file name:",
		State.AWAITING_REFINE_CHOICE: "Do you want to add criteria to search? (yes/no)",
		State.AWAITING_CRITERIA_KEYWORD: (
			"Enter criteria for refining search (" + ", ".join(CriteriaParser.DISPLAY_KEYWORDS) + "):"
		),
	}

	def __init__(
		self,
		context: SessionContext,
		lines: Optional[Iterable[str]] = None,
		output: Optional[TextIO] = None,
		parser: Optional[CriteriaParser] = None,
	):
		self.context = context
		self.lines: Iterator[str] = iter(lines if lines is not None else sys.stdin)
		self.output = output or sys.stdout
		self.parser = parser or CriteriaParser()
		self.state = State.AWAITING_FAVORITES_COMMAND
		self._pending_action: Optional[str] = None  # 'add' or 'remove' while awaiting a title
		self._pending_field: Optional[str] = None  # criteria field while awaiting a value
		self._pending_keyword: Optional[str] = None  # keyword as the user typed it
		self._handlers: Dict[State, Callable[[str], State]] = {
			State.AWAITING_FAVORITES_COMMAND: self._on_favorites_command,
			State.AWAITING_FAVORITE_TITLE: self._on_favorite_title,
			State.AWAITING_SAVE_CHOICE: self._on_save_choice,
			State.AWAITING_FILE_NAME: self._on_file_name,
			State.AWAITING_REFINE_CHOICE: self._on_refine_choice,
			State.AWAITING_CRITERIA_KEYWORD: self._on_criteria_keyword,
			State.AWAITING_CRITERIA_VALUE: self._on_criteria_value,
		}

	def run(self) -> SessionContext:
		"""Show the current results, then loop until a terminal state or end of input."""
		self._show_results()
		self._prompt()
		while self.state is not State.DONE:
			line = next(self.lines, None)
			if line is None:
				logger.debug(f"[Session] Input ended in state {self.state.value}")
				break
			self.state = self._handlers[self.state](line.strip())
			if self.state is not State.DONE:
				self._prompt()
		return self.context

	# -- output helpers -------------------------------------------------

	def _say(self, text: str) -> None:
		self.output.write(text + '\n')

	def _prompt(self) -> None:
		if self.state is State.AWAITING_FAVORITE_TITLE:
			verb = 'add to' if self._pending_action == 'add' else 'remove from'
			self._say(f"Enter the title of the movie to {verb} favorites:")
		elif self.state is State.AWAITING_CRITERIA_VALUE:
			self._say(f"Enter {self._pending_keyword}:")
		else:
			self._say(self.PROMPTS[self.state])

	def _show_results(self) -> None:
		print_results(self.context.results, stream=self.output, full_details=self.context.full_details)

	# -- state handlers -------------------------------------------------

	def _on_favorites_command(self, line: str) -> State:
		command = line.lower()
		if command in ('add', 'remove'):
			self._pending_action = command
			return State.AWAITING_FAVORITE_TITLE
		if command == 'list':
			for text in format_favorites(self.context.favorites):
				self._say(text)
			return State.AWAITING_FAVORITES_COMMAND
		if command == 'done':
			return State.AWAITING_SAVE_CHOICE
		self._say("Invalid option. Please choose add, remove, list, or done.")
		return State.AWAITING_FAVORITES_COMMAND

	def _on_favorite_title(self, line: str) -> State:
		favorites = self.context.favorites
		if self._pending_action == 'add':
			movie = self._find_by_title(line, self.context.results)
			if movie is None:
				self._report_not_found(line, self.context.results)
			elif favorites.add(movie):
				self._say(f"Movie added to favorites: {movie.title}")
			else:
				self._say(f"Movie is already a favorite: {movie.title}")
		else:
			movie = self._find_by_title(line, self.context.results) or self._find_by_title(line, favorites.list())
			if movie is None:
				self._report_not_found(line, self.context.results)
			elif favorites.remove(movie):
				self._say(f"Movie removed from favorites: {movie.title}")
			else:
				self._say(f"Movie not found in favorites: {movie.title}")
		self._pending_action = None
		return State.AWAITING_FAVORITES_COMMAND

	def _on_save_choice(self, line: str) -> State:
		answer = line.lower()
		if answer in YES:
			return State.AWAITING_FILE_NAME
		if answer in NO:
			return State.AWAITING_REFINE_CHOICE
		self._say("Please answer yes or no.")
		return State.AWAITING_SAVE_CHOICE

	def _on_file_name(self, line: str) -> State:
		if not line:
			self._say("Invalid input, please retry. A file name is required.")
			return State.AWAITING_FILE_NAME
		if write_results(self.context.results, line, full_details=True):
			self.context.saved_to = line
			self._say(f"Results saved to: {line}")
			return State.DONE
		self._say(f"Could not save results to: {line}")
		return State.AWAITING_SAVE_CHOICE

	def _on_refine_choice(self, line: str) -> State:
		answer = line.lower()
		if answer in NO:
			return State.DONE
		if answer in YES:
			return State.AWAITING_CRITERIA_KEYWORD
		self._say("Please answer yes or no.")
		return State.AWAITING_REFINE_CHOICE

	def _on_criteria_keyword(self, line: str) -> State:
		field_name = self.parser.normalize_keyword(line)
		if field_name is None:
			self._say("Invalid criteria. Please try again.")
			return State.AWAITING_CRITERIA_KEYWORD
		self._pending_field = field_name
		self._pending_keyword = line
		return State.AWAITING_CRITERIA_VALUE

	def _on_criteria_value(self, line: str) -> State:
		try:
			value = self.parser.parse_value(self._pending_field, line)
		except ValueError as e:
			self._say(f"Invalid input, please retry. ({e})")
			return State.AWAITING_CRITERIA_VALUE
		setattr(self.context.criteria, self._pending_field, value)
		logger.info(f"[Session] Criteria refined: {self._pending_field} = {value!r}")
		self._pending_field = None
		self._pending_keyword = None
		# Re-filter from the full catalog, not from the previous results
		self.context.refilter()
		self._show_results()
		return State.AWAITING_FAVORITES_COMMAND

	# -- lookups ----------------------------------------------------------

	def _find_by_title(self, title: str, movies: Iterable[Movie]) -> Optional[Movie]:
		wanted = title.lower()
		for movie in movies:
			if (movie.title or '').lower() == wanted:
				return movie
		return None

	def _report_not_found(self, title: str, movies: List[Movie]) -> None:
		message = f"Movie not found: {title}"
		titles = [m.title for m in movies if m.title]
		if title and titles:
			best = process.extractOne(title, titles, scorer=fuzz.WRatio)
			if best and best[1] >= SUGGESTION_THRESHOLD:
				message += f" (did you mean '{best[0]}'?)"
		self._say(message)
