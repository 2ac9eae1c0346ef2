"""
Command line entry point: Robust Rank Aggregation.

    rank-aggregation-fdr -i input.txt -o output.txt -p 0.25
"""

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from .config import RRAConfig, load_config
from .data.loader import read_rra_table, write_group_table
from .exceptions import RRAError
from .methods.rra import RobustRankAggregation
from .visualization.plots import plot_fdr_curve, plot_lo_value_distribution


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rank-aggregation-fdr',
        description="Robust Rank Aggregation.",
        epilog="example:\n  %(prog)s -i input.txt -o output.txt -p 0.25",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('-i', dest='input', required=True,
                        help="<input data file>. Format: <item id> <group id> <list id> <value>")
    parser.add_argument('-o', dest='output', required=True,
                        help="<output file>. Format: <group id> <number of items in the group> "
                             "<lo-value> <false discovery rate>")
    parser.add_argument('-p', dest='max_percentile', type=float, default=None,
                        help="<maximum percentile>. RRA only consider the items with percentile "
                             "smaller than this parameter. Default=0.25")
    parser.add_argument('--config', type=str, default=None,
                        help="YAML or JSON configuration file")
    parser.add_argument('--n-jobs', dest='n_jobs', type=int, default=None,
                        help="Worker threads for the null simulation")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed of the null simulation (default 123456)")
    parser.add_argument('--plot-dir', dest='plot_dir', type=str, default=None,
                        help="Directory for diagnostic plots")
    parser.add_argument('--quiet', action='store_true',
                        help="Suppress progress messages")
    return parser


def parse_args(argv=None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_percentile is not None and not 0.0 <= args.max_percentile <= 1.0:
        parser.error("maxPercentile should be within 0.0 and 1.0")
    if args.n_jobs is not None and args.n_jobs < 1:
        parser.error("--n-jobs must be a positive integer")
    return args


def resolve_config(args: argparse.Namespace) -> RRAConfig:
    """Configuration file (or defaults) overridden by command line flags."""
    config = load_config(args.config) if args.config else RRAConfig()
    if args.max_percentile is not None:
        config.max_percentile = args.max_percentile
    if args.n_jobs is not None:
        config.n_jobs = args.n_jobs
    if args.seed is not None:
        config.random_state = args.seed
    return config.validate()


def main(argv=None) -> int:
    args = parse_args(argv)

    def say(message, end='\n'):
        if not args.quiet:
            print(message, end=end, flush=True)

    try:
        config = resolve_config(args)

        say("reading input file...", end='')
        dataset = read_rra_table(args.input, max_groups=config.max_groups, max_lists=config.max_lists)
        say("done.")
        say(f"{dataset.n_items} items\n{dataset.n_groups} groups\n{dataset.n_lists} lists")

        model = RobustRankAggregation.from_config(config)

        say("computing lo-values for each group...", end='')
        model.compute_percentiles(dataset)
        model.compute_lo_values(dataset)
        say("done.")

        say("computing false discovery rate...", end='')
        model.simulate_null(dataset)
        model.compute_fdr(dataset)
        say("done.")

        say("save to output file...", end='')
        write_group_table(dataset, args.output)
        say("done.")

        if args.plot_dir:
            plot_dir = Path(args.plot_dir)
            plot_dir.mkdir(parents=True, exist_ok=True)
            fig = plot_lo_value_distribution(model.lo_values_, model.null_pool_,
                                             save_path=plot_dir / 'lo_value_distribution.png')
            plt.close(fig)
            fig = plot_fdr_curve(model.results_, fdr_level=config.fdr_level,
                                 save_path=plot_dir / 'fdr_curve.png')
            plt.close(fig)
            say(f"plots saved to {plot_dir}")

    except (RRAError, OSError, ValueError) as e:
        say("\nfailed.")
        print(f"error: {e}", file=sys.stderr)
        say("program exit!")
        return 1

    say("finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
