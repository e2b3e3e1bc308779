"""
Gemini-backed generation of synopses and structured analyses.

Two prompt templates are available. The plain one asks for an engaging synopsis and
only needs markdown cleanup; the structured one asks for the section layout that
the analysis extractor understands.
"""

from typing import Optional

from google import genai  # Google Gen AI SDK

from loguru import logger

from .analysis_extractor import extract_analysis
from .categories import CATEGORY_HEADERS
from .errors import UpstreamServiceError
from .markdown_cleanup import clean_markdown
from .models import MovieAnalysis

DEFAULT_MODEL = "gemini-2.0-flash"

SYNOPSIS_PROMPT = """Write a detailed and engaging synopsis for the movie "{title}".
Here's the basic overview: {overview}

Please provide a comprehensive synopsis that includes:
1. Main plot points
2. Key themes and messages
3. Character development
4. Notable scenes or moments
5. The movie's impact or significance

Format the response in a clear, well-structured way."""

ANALYSIS_PROMPT = """Analyze the movie "{title}".
Here's the basic overview: {overview}

Answer in plain text using exactly this layout, with a blank line after every section label:

{title}
<release date>

Synopsis

<two or three paragraphs>

Key Elements

<one "Label: value" pair per line, e.g. Tone: Hopeful>

Tropes & Tags

<up to ten short tags, one per line>

Where to Watch

<one streaming or rental platform per line>

Tags may be grouped under these categories, but do not repeat the category names:
{categories}
Do not use markdown, bullets or numbering."""


class SynopsisGenerator:
	"""
	Wraps a google-genai client.
	Pass `client` to reuse an existing one (tests pass a fake).
	"""

	def __init__(self, api_key: Optional[str] = None, model_name: str = DEFAULT_MODEL, client=None):
		if client is None:
			if not api_key:
				raise ValueError("Gemini API key is required")
			client = genai.Client(api_key=api_key)
		self.client = client
		self.model_name = model_name
		logger.debug(f"[Gemini] Generator ready with model '{model_name}'")

	def generate_synopsis(self, title: str, overview: str) -> str:
		"""Free-form synopsis with markdown stripped."""
		prompt = SYNOPSIS_PROMPT.format(title=title, overview=overview)
		return clean_markdown(self._generate(prompt, title, overview))

	def generate_analysis(self, title: str, overview: str) -> MovieAnalysis:
		"""Structured analysis parsed from the templated response."""
		prompt = ANALYSIS_PROMPT.format(
			title=title,
			overview=overview,
			categories=", ".join(sorted(CATEGORY_HEADERS)),
		)
		text = clean_markdown(self._generate(prompt, title, overview))
		return extract_analysis(text)

	def _generate(self, prompt: str, title: str, overview: str) -> str:
		if not title or not overview:
			raise ValueError("Title and overview are required")

		logger.info(f"[Gemini] Sending request for '{title}'...")
		try:
			response = self.client.models.generate_content(model=self.model_name, contents=prompt)
		except Exception as e:  # SDK and transport errors share no common base
			logger.error(f"[Gemini] API error for '{title}': {type(e).__name__}: {e}")
			raise UpstreamServiceError("gemini", str(e)) from e

		text = response.text or ""
		logger.info(f"[Gemini] Received {len(text)} characters for '{title}'")
		return text
