"""
Markdown cleanup for generated text.
Strips heading/emphasis markup and two known boilerplate artifacts of the synopsis prompt.
"""

import re  # markup patterns

BANNER = "AI-Generated Synopsis"  # heading the model sometimes repeats at the top
SECTION_LABEL = "Synopsis"  # label that is sometimes followed by a stray "**"

RE_STRAY_MARKER = re.compile(rf"(?<!\*){SECTION_LABEL}:?\*+")  # "Synopsis**" without an opening marker
RE_HEADING = re.compile(r"^[ \t]*#{1,6}[ \t]+", re.M)  # "## Heading"
RE_BOLD = re.compile(r"\*\*([^*\n]+)\*\*")  # **bold**
RE_ITALIC = re.compile(r"\*([^*\n]+)\*")  # *italic*
RE_LEADING_ASTERISKS = re.compile(r"^([ \t]*)\*+[ \t]*", re.M)  # leftover "* " at line start


def clean_markdown(text: str) -> str:
	"""
	Remove markdown headings and emphasis, keeping the inner text.

	>>> clean_markdown("# Title\\n*emphasis* text")
	'Title\\nemphasis text'
	"""
	if not text:
		return ""

	cleaned = RE_STRAY_MARKER.sub(f"{SECTION_LABEL}\n", text)  # must run before unwrapping
	cleaned = RE_HEADING.sub("", cleaned)
	cleaned = RE_BOLD.sub(r"\1", cleaned)
	cleaned = RE_ITALIC.sub(r"\1", cleaned)
	cleaned = RE_LEADING_ASTERISKS.sub(r"\1", cleaned)

	# Banner only counts when it is the very first line
	cleaned = cleaned.lstrip()
	first, sep, rest = cleaned.partition("\n")
	if first.strip().rstrip(":") == BANNER:
		cleaned = rest

	return cleaned.strip()
