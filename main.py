"""
Robust Rank Aggregation of replicated screens.

Usage:
    python main.py -i input.txt -o output.txt -p 0.25
"""

import sys

from rank_aggregation_fdr.cli import main


if __name__ == "__main__":
    sys.exit(main())
