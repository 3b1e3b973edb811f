"""CLI for inspecting how a search box string is parsed."""
from __future__ import annotations

import argparse
import json

from aml_search.config import Settings
from aml_search.search.filters import filter_to_dict, parse_query
from aml_search.search.operators import build_search_operators


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("query")
    parser.add_argument("--match-case", action="store_true", default=None)
    parser.add_argument("--match-whole-word", action="store_true", default=None)
    args = parser.parse_args()

    settings = Settings()
    filters = parse_query(args.query)
    operators = build_search_operators(filters, settings.options_for(args.match_case, args.match_whole_word))
    print(
        json.dumps(
            {
                "filters": [filter_to_dict(f) for f in filters],
                "operators": [op.model_dump(mode="json") for op in operators],
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
