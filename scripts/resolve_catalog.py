"""
Resolve catalog entries on TMDB and persist the matches.

This script:
1) Loads the catalog named by CINELIST_CATALOG_PATH
2) Picks a random sample (CINELIST_SAMPLE_SIZE entries), or every entry with --all
3) Looks each pick up on TMDB, one request at a time
4) Writes one JSON line per entry to data/resolved.jsonl (or --output)

Usage:
    python -m scripts.resolve_catalog [--all] [--output PATH]

Requires CINELIST_TMDB_API_KEY.
"""

import argparse  # command line options
import json  # JSON lines output
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths
from typing import List, Optional

from loguru import logger  # console logging

from cinelist.discovery import DiscoveryService  # catalog + TMDB orchestration
from cinelist.sampling import sample_entries  # random picks
from cinelist.settings import Settings  # environment configuration

ROOT = Path(__file__).resolve().parents[1]  # project root
DEFAULT_OUTPUT = ROOT / 'data' / 'resolved.jsonl'  # output dataset


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Resolve catalog entries on TMDB.")
	parser.add_argument(
		"--all",
		action="store_true",
		help="Resolve every catalog entry instead of a random sample.",
	)
	parser.add_argument(
		"--output",
		type=Path,
		default=DEFAULT_OUTPUT,
		help="JSON lines file to write.",
	)
	return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, service: Optional[DiscoveryService] = None) -> Path:
	args = parse_args(argv)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Resolve Catalog on TMDB")
	logger.info("=" * 60)

	out_path: Path = args.output
	out_path.parent.mkdir(parents=True, exist_ok=True)  # ensure exists

	# 1) Load catalog and clients
	logger.info("[1/3] Loading catalog...")
	if service is None:
		service = DiscoveryService.from_settings(Settings())  # parses the catalog
	if not service.catalog_loaded:
		raise SystemExit("Catalog file not found; set CINELIST_CATALOG_PATH")
	logger.info(f"[OK] Loaded {len(service.entries)} entries")  # confirm count

	# 2) Sample (or take all) and look up
	picks = list(service.entries) if args.all else sample_entries(service.entries, service.sample_size)
	logger.info(f"\n[2/3] Looking up {len(picks)} entries, one request at a time...")
	t0 = time.time()  # start timer
	lookups = service.resolve(picks)  # sequential, keyed by entry
	logger.info(f"[OK] Lookups finished in {time.time() - t0:.2f}s")  # report

	# 3) Save
	logger.info("\n[3/3] Writing results...")
	with open(out_path, 'w', encoding='utf-8') as f:
		for entry, movies in lookups.items():
			best = movies[0].to_dict() if movies else None  # ranked, best first
			f.write(json.dumps({"entry": entry.to_dict(), "match": best, "candidates": len(movies)}) + "\n")
	logger.info(f"[OK] Saved to {out_path}")  # done
	logger.info("=" * 60)
	return out_path


if __name__ == '__main__':
	main()  # invoke resolver
