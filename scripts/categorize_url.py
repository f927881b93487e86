#!/usr/bin/env python
"""
Run the categorize pipeline for one URL and print the JSON result.

Usage: python scripts/categorize_url.py https://example.com/some-post [--title-only]

Reads ANTHROPIC_API_KEY (and the other settings) from the environment or
.env, so it doubles as a smoke test for a key and for a particular site.
No vocabulary is written.
"""

import asyncio
import json
import sys

from linkstash.exceptions import LinkStashError
from linkstash.services.link_pipeline import get_link_pipeline


async def main(url: str, title_only: bool) -> int:
    pipeline = get_link_pipeline()
    try:
        if title_only:
            result = await pipeline.extract_title(url)
        else:
            result = await pipeline.categorize(url)
    except LinkStashError as e:
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    if len(args) != 1:
        print(__doc__.strip(), file=sys.stderr)
        sys.exit(2)
    sys.exit(asyncio.run(main(args[0], "--title-only" in sys.argv[1:])))
