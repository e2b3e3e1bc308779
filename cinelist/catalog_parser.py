"""
Catalog parsing module.
Turns the loosely formatted film catalog (one film per line) into CatalogEntry records.
"""

# Standard libs for regex, typing, and paths
import re  # line classification and year/title extraction
from typing import List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our CatalogEntry data class used across the project
from .models import CatalogEntry  # structured catalog record

# Console logging
from loguru import logger  # console logger

# Text that marks the catalog's own title line (e.g. "List of LGBTQ-related films")
DEFAULT_SELF_TITLE = "List of LGBTQ"


class CatalogParser:
	"""
	Parses catalog text in the formats "Title, Country (Year)", "Title (Year)" or bare "Title".
	"""

	# Pre-compiled patterns for line classification
	RE_SECTION_LETTER = re.compile(r"^[A-Z]$")  # alphabet section header like "B"
	RE_RANGE_MARKER = re.compile(r"^[0-9][–-][0-9]$")  # "0–9" numeric section header
	# Patterns for year and title extraction
	RE_TRAILING_YEAR = re.compile(r"\((\d{4})\)$")  # "(1999)" at the end of the line
	RE_ANY_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")  # fallback: any 19xx/20xx token
	RE_COUNTRY_YEAR_SUFFIX = re.compile(r", [^(,]+ \(\d{4}\)$")  # ", Country (1999)"; the country holds no comma
	RE_YEAR_SUFFIX = re.compile(r" \(\d{4}\)$")  # " (1999)"

	def __init__(self, self_title: str = DEFAULT_SELF_TITLE):
		"""Store the marker used to recognize the catalog's own title line."""
		self.self_title = self_title  # lines containing this text are skipped

	def load_catalog(self, filepath: str) -> List[CatalogEntry]:
		"""
		Read the catalog file from disk and parse every line into entries.
		Raises FileNotFoundError when the file does not exist.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Catalog file not found: {filepath}")

		logger.info(f"[Catalog] Loading catalog from {filepath}...")  # log action
		content = filepath.read_text(encoding='utf-8')  # whole file, already decoded
		entries = self.parse_entries(content)  # single pass over the text
		logger.info(f"[Catalog] Parsed {len(entries)} entries.")  # summary
		return entries  # return list

	def read_lines(self, filepath: str) -> List[str]:
		"""
		Return the trimmed, non-empty raw lines of the catalog.
		Unreadable files are logged and produce an empty list.
		"""
		try:
			content = Path(filepath).read_text(encoding='utf-8')  # decode as UTF-8
		except OSError as e:
			logger.error(f"[Catalog] Error reading catalog lines from {filepath}: {e}")  # missing/unreadable
			return []  # degrade to an empty list
		return [line.strip() for line in content.split('\n') if line.strip()]  # drop blanks

	def parse_entries(self, content: str) -> List[CatalogEntry]:
		"""Parse the full catalog text; output keeps the input line order."""
		entries: List[CatalogEntry] = []  # accumulator
		for line in content.split('\n'):  # one nominal entry per line
			entry = self.parse_line(line)  # None for headers and noise
			if entry is not None:
				entries.append(entry)  # collect
		logger.debug(f"[Catalog] parse_entries produced {len(entries)} entries")
		return entries

	def parse_line(self, line: str) -> Optional[CatalogEntry]:
		"""Parse one catalog line, returning None for skipped lines."""
		trimmed = line.strip()  # ignore surrounding whitespace

		if self._is_noise(trimmed):  # headers, markers, comments
			return None

		year = self._extract_year(trimmed)  # optional 4-digit string
		title = self._extract_title(trimmed)  # line minus country/year suffix

		if not title:  # nothing left to show
			return None
		return CatalogEntry(title=title, year=year)

	def _is_noise(self, line: str) -> bool:
		"""True for lines that never describe a film."""
		if not line:  # empty line
			return True
		if line.startswith('#'):  # comment marker
			return True
		if self.RE_SECTION_LETTER.match(line):  # "A", "B", ...
			return True
		if self.RE_RANGE_MARKER.match(line):  # "0–9"
			return True
		return bool(self.self_title) and self.self_title in line  # catalog's own title

	def _extract_year(self, line: str) -> Optional[str]:
		# Prefer the parenthesized year at the end of the line
		m = self.RE_TRAILING_YEAR.search(line)
		if m:
			return m.group(1)
		# Otherwise any 19xx/20xx token in the line
		m = self.RE_ANY_YEAR.search(line)
		if m:
			return m.group(0)
		return None

	def _extract_title(self, line: str) -> str:
		# ", Country (Year)" takes precedence over a bare " (Year)"
		m = self.RE_COUNTRY_YEAR_SUFFIX.search(line)
		if m:
			return line[:m.start()].strip()
		m = self.RE_YEAR_SUFFIX.search(line)
		if m:
			return line[:m.start()].strip()
		return line
