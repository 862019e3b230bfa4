#!/usr/bin/env python3
"""
Load prompts from a JSON file into the Prompt Library SQLite database.

The file must contain a JSON array of objects with ``title``,
``content`` and optionally ``description`` and ``tags``.  Migrations
are applied first, so the database file is created if it does not
exist.  Entries that fail validation are reported and skipped; every
seeded prompt starts with zero votes.

Usage:
    python seed_prompts.py --db ./prompt_library_api/prompt_library.db --file prompts.json
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from pydantic import ValidationError

from prompt_library_api.app.core.config import settings
from prompt_library_api.app.core.db import init_db
from prompt_library_api.app.schemas.prompt import PromptCreate
from prompt_library_api.app.services.prompt_service import PromptService


async def seed(entries: list) -> int:
    """Create a prompt for each valid entry and return how many were created."""
    created = 0
    for index, entry in enumerate(entries):
        try:
            data = PromptCreate.model_validate(entry)
        except ValidationError as e:
            print(f"[!] Skipping entry {index}: {e.error_count()} validation error(s)", file=sys.stderr)
            continue
        await PromptService.create_prompt(data)
        created += 1
    return created


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Seed the prompt library database from a JSON file.")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (created if missing)")
    ap.add_argument("--file", required=True, help="JSON file containing an array of prompts")
    args = ap.parse_args(argv)

    if not os.path.exists(args.file):
        print(f"[!] File not found: {args.file}", file=sys.stderr)
        return 1

    try:
        with open(args.file, encoding="utf-8") as fh:
            entries = json.load(fh)
    except json.JSONDecodeError as e:
        print(f"[!] Invalid JSON in {args.file}: {e}", file=sys.stderr)
        return 1
    if not isinstance(entries, list):
        print("[!] Expected a JSON array of prompts", file=sys.stderr)
        return 1

    settings.database_url = os.path.abspath(args.db)
    init_db()
    created = asyncio.run(seed(entries))
    print(f"[+] Seeded {created} of {len(entries)} prompt(s) into {settings.database_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
