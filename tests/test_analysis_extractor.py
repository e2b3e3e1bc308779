"""
Unit tests for the analysis extractor, category headers, and markdown cleanup.
Run: python tests/test_analysis_extractor.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from cinelist.analysis_extractor import AnalysisExtractor, extract_analysis
from cinelist.categories import CATEGORY_HEADERS, is_category_header
from cinelist.markdown_cleanup import clean_markdown
from cinelist.models import MovieAnalysis


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


DOCUMENT = """Movie X
2021

Synopsis

A story about discovery.

Key Elements

Tone: Hopeful
Genre: Drama

Tropes & Tags

Found Family
Coming of Age & First Love
Self-Discovery

Where to Watch

StreamCo
"""


def test_template_document():
	a = extract_analysis(DOCUMENT)
	assert_equal(a.title, "Movie X", "title from line 1")
	assert_equal(a.release_date, "2021", "release date from line 2")
	assert_equal(a.synopsis, "A story about discovery.", "synopsis")
	assert_equal(a.key_elements, ["Tone: Hopeful", "Genre: Drama"], "key elements")
	assert_equal(a.tropes_and_tags, ["Found Family", "Self-Discovery"], "category header filtered")
	assert_equal(a.where_to_watch, ["StreamCo"], "platforms")


def test_deterministic():
	assert_equal(extract_analysis(DOCUMENT), extract_analysis(DOCUMENT), "same input, same record")
	assert_equal(extract_analysis(DOCUMENT).to_dict(), extract_analysis(DOCUMENT).to_dict(), "same payload")


def test_missing_sections_degrade():
	a = extract_analysis("Movie Y\n1999\n\nSynopsis\n\nOnly a synopsis here.\n")
	assert_equal(a.synopsis, "Only a synopsis here.", "synopsis kept")
	assert_equal((a.key_elements, a.tropes_and_tags, a.where_to_watch), ([], [], []), "other fields empty")


def test_empty_and_short_input():
	assert_equal(extract_analysis(""), MovieAnalysis(), "empty document")
	assert_equal(extract_analysis(None), MovieAnalysis(), "None document")
	a = extract_analysis("Just one line")
	assert_equal((a.title, a.release_date), ("", ""), "header needs two lines")


def test_bullets_and_blank_lines_dropped():
	doc = "T\nD\nKey Elements\n- bullet one\n* bullet two\n• bullet three\n\nSetting: Paris\n"
	assert_equal(extract_analysis(doc).key_elements, ["Setting: Paris"], "bullets dropped")


def test_header_containing_line_is_dropped():
	doc = "T\nD\nTropes & Tags\nSlow Burn\nHistorical & Period Dramas (1800s)\nslow burn\nSlow Burn\n"
	tags = extract_analysis(doc).tropes_and_tags
	assert_equal(tags, ["Slow Burn", "slow burn", "Slow Burn"], "no dedup, no case folding")
	assert_true(not any(is_category_header(t) for t in tags), "no category header survives")


def test_anchor_variants_and_order():
	doc = "T\nD\nwhere to watch:\nCinemaPlus\nSYNOPSIS:\nFirst paragraph.\n\nSecond paragraph.\n"
	a = extract_analysis(doc)
	assert_equal(a.where_to_watch, ["CinemaPlus"], "lower-case anchor with colon")
	assert_equal(a.synopsis, "First paragraph.\n\nSecond paragraph.", "multi-paragraph synopsis")


def test_warning_marker_ends_document():
	doc = DOCUMENT + "\n⚠ Availability may vary by region.\nNotAPlatform\n"
	assert_equal(extract_analysis(doc).where_to_watch, ["StreamCo"], "warning block ignored")


def test_warning_prose_is_not_a_marker():
	doc = "T\nD\nSynopsis\nWarning signs pile up.\nShe leaves.\nWarning: availability varies.\nHidden\n"
	assert_equal(extract_analysis(doc).synopsis, "Warning signs pile up.\nShe leaves.", "only 'Warning:' ends the document")


def test_tropes_and_tags_alias():
	doc = "T\nD\nTropes and Tags:\nSlow Burn\nMainstream WLW\nWhere to Watch\nStreamCo\n"
	a = extract_analysis(doc)
	assert_equal(a.tropes_and_tags, ["Slow Burn"], "spelled-out alias opens the tropes section")
	assert_equal(a.where_to_watch, ["StreamCo"], "next anchor still recognised")


def test_text_before_first_anchor_ignored():
	doc = "T\nD\nHere is your analysis!\nSynopsis\nBody.\n"
	assert_equal(extract_analysis(doc).synopsis, "Body.", "preamble skipped")


def test_custom_category_headers():
	extractor = AnalysisExtractor(category_headers=frozenset({"Found Family"}))
	a = extractor.extract(DOCUMENT)
	assert_equal(a.tropes_and_tags, ["Coming of Age & First Love", "Self-Discovery"], "custom set applied")


def test_category_headers_set():
	assert_equal(len(CATEGORY_HEADERS), 10, "ten category headers")
	assert_true("Mainstream WLW" in CATEGORY_HEADERS, "glossary header present")
	assert_true(not is_category_header("Found Family"), "ordinary tag is not a header")


def test_to_dict_shape():
	payload = extract_analysis(DOCUMENT).to_dict()
	assert_equal(
		sorted(payload),
		["keyElements", "releaseDate", "synopsis", "title", "tropesAndTags", "whereToWatch"],
		"camelCase keys",
	)


def test_clean_markdown_basic():
	assert_equal(clean_markdown("# Title\n*emphasis* text"), "Title\nemphasis text", "heading and emphasis")
	assert_equal(clean_markdown("## Plot\n**Bold** and *it*"), "Plot\nBold and it", "bold and italic")
	assert_equal(clean_markdown(""), "", "empty text")


def test_clean_markdown_artifacts():
	text = "## AI-Generated Synopsis\nSynopsis**A quiet love story."
	assert_equal(clean_markdown(text), "Synopsis\nA quiet love story.", "banner removed, stray marker split")
	assert_equal(clean_markdown("Intro\nAI-Generated Synopsis"), "Intro\nAI-Generated Synopsis", "banner only at start")
	assert_equal(clean_markdown("**Synopsis**\nText"), "Synopsis\nText", "wrapped label untouched")
	assert_equal(clean_markdown("Synopsis*A quiet love story."), "Synopsis\nA quiet love story.", "single stray asterisk")
	assert_equal(clean_markdown("Synopsis:**A quiet love story."), "Synopsis\nA quiet love story.", "stray marker after colon")


def test_clean_markdown_leading_asterisks():
	assert_equal(clean_markdown("* Netflix\n** Hulu"), "Netflix\nHulu", "leading asterisks removed")


def test_cleanup_then_extract():
	raw = "**Movie X**\n2021\n\n## Synopsis\n\nA *story* about discovery.\n\n## Where to Watch\n\nStreamCo\n"
	a = extract_analysis(clean_markdown(raw))
	assert_equal((a.title, a.synopsis, a.where_to_watch), ("Movie X", "A story about discovery.", ["StreamCo"]), "pipeline")


def main():
	print("Running analysis extractor tests...")
	for name, fn in list(globals().items()):
		if name.startswith("test_") and callable(fn):
			fn()
			print(f" - {name} ok")
	print("All analysis extractor tests passed!")


if __name__ == '__main__':
	main()
