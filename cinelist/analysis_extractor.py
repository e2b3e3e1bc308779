"""
Analysis extraction module.
Turns a generated analysis document into a MovieAnalysis record.

The expected document loosely follows this template:

	<title>
	<release date>

	Synopsis
	<free text>

	Key Elements
	<one element per line>

	Tropes & Tags
	<one tag per line, possibly mixed with category headers>

	Where to Watch
	<one platform per line>

Sections are found by a line state machine rather than by chained patterns, so
missing blank lines, reordered sections, or a trailing colon on an anchor do not
break extraction. A missing section simply leaves its field empty.
"""

import re  # terminal marker pattern
from enum import Enum  # extractor states
from typing import AbstractSet, Dict, List, Optional

from loguru import logger

from .categories import CATEGORY_HEADERS, is_category_header
from .models import MovieAnalysis


class State(Enum):
	HEADER = "header"
	SEEKING_SECTION = "seeking_section"
	IN_SYNOPSIS = "in_synopsis"
	IN_KEY_ELEMENTS = "in_key_elements"
	IN_TROPES = "in_tropes"
	IN_WHERE_TO_WATCH = "in_where_to_watch"
	DONE = "done"


# Anchor text (lower-cased, without trailing colon) -> state it opens
SECTION_ANCHORS: Dict[str, State] = {
	"synopsis": State.IN_SYNOPSIS,
	"key elements": State.IN_KEY_ELEMENTS,
	"tropes & tags": State.IN_TROPES,
	"tropes and tags": State.IN_TROPES,
	"where to watch": State.IN_WHERE_TO_WATCH,
}

BULLET_MARKERS = ("-", "*", "•")  # list bullets; such lines are dropped
RE_TERMINAL = re.compile(r"^(?:⚠|warning:)", re.I)  # disclaimer block closes the document


class AnalysisExtractor:
	"""
	Line-oriented extractor for the analysis template.
	`category_headers` can be swapped for a custom set of noise lines.
	"""

	def __init__(self, category_headers: AbstractSet[str] = CATEGORY_HEADERS):
		self.category_headers = category_headers

	def extract(self, text: str) -> MovieAnalysis:
		"""Parse `text`; never raises, missing parts stay empty."""
		lines = (text or "").splitlines()
		title = release_date = ""
		bodies: Dict[State, List[str]] = {
			State.IN_SYNOPSIS: [],
			State.IN_KEY_ELEMENTS: [],
			State.IN_TROPES: [],
			State.IN_WHERE_TO_WATCH: [],
		}

		body_lines = lines  # State.HEADER
		if len(lines) >= 2:
			# Purely positional: line 1 is the title, line 2 the release date
			title, release_date = lines[0].strip(), lines[1].strip()
			body_lines = lines[2:]
		state = State.SEEKING_SECTION  # header consumed

		for raw in body_lines:
			line = raw.strip()
			if RE_TERMINAL.match(line):
				state = State.DONE
			if state is State.DONE:
				break

			anchor = self._anchor_state(line)
			if anchor is not None:
				state = anchor
				continue
			if state is State.SEEKING_SECTION:
				continue  # text between the header and the first anchor
			bodies[state].append(line)

		analysis = MovieAnalysis(
			title=title,
			release_date=release_date,
			synopsis="\n".join(bodies[State.IN_SYNOPSIS]).strip(),
			key_elements=self._list_items(bodies[State.IN_KEY_ELEMENTS]),
			tropes_and_tags=[
				item for item in self._list_items(bodies[State.IN_TROPES])
				if not is_category_header(item, self.category_headers)
			],
			where_to_watch=self._list_items(bodies[State.IN_WHERE_TO_WATCH]),
		)
		logger.debug(
			f"[Extractor] title='{analysis.title}' key_elements={len(analysis.key_elements)} "
			f"tropes={len(analysis.tropes_and_tags)} platforms={len(analysis.where_to_watch)}"
		)
		return analysis

	@staticmethod
	def _anchor_state(line: str) -> Optional[State]:
		return SECTION_ANCHORS.get(line.rstrip(":").strip().lower())

	@staticmethod
	def _list_items(lines: List[str]) -> List[str]:
		# Blank and bullet-prefixed lines are not items
		return [line for line in lines if line and not line.startswith(BULLET_MARKERS)]


def extract_analysis(text: str) -> MovieAnalysis:
	"""Extract a MovieAnalysis using the default category headers."""
	return AnalysisExtractor().extract(text)
