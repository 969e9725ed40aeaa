"""Main CLI entry point for mfgraph."""

import argparse
import logging
import sys
from typing import List, Optional

import requests

from . import __version__
from .details import describe_node
from .formatters import OutputFormatter
from .graph_builder import DependencyGraphBuilder, GraphOptions
from .parsers import ConfigInputError, FileParser
from .resolver import DEFAULT_STRATEGY, STRATEGIES
from .commands.compare import compare_graphs
from .commands.stats import show_stats
from .commands.validate import validate_graph

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

INPUT_READ_ERRORS = (OSError, ConfigInputError, requests.RequestException)


def setup_logging(verbose: bool = False, log_level: Optional[str] = None):
    """Configure logging based on verbosity flags."""
    if log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def _write_output(output: str, output_file: str) -> int:
    try:
        if output_file == '-':
            print(output, end='')
        else:
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(output)
            logger.info(f"Output written to: {output_file}")
            print(f"Output written to: {output_file}")
    except OSError as e:
        logger.error(f"Error writing output: {e}")
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1
    return 0


def handle_build(args):
    """Handle the 'build' subcommand."""
    setup_logging(args.verbose, args.loglevel)

    try:
        configs = FileParser.parse_config_file(args.input)
    except INPUT_READ_ERRORS as e:
        logger.error(f"Error reading configurations: {e}")
        print(f"Error reading configurations: {e}", file=sys.stderr)
        return 1

    options = GraphOptions(resolver_strategy=args.resolver)
    graph = DependencyGraphBuilder(options).build(configs)

    if graph.is_empty:
        logger.warning("No Module Federation configurations found to display in the graph")

    if args.output_format == 'node-link':
        output = OutputFormatter.format_as_node_link(graph)
    elif args.output_format == 'tree':
        output = OutputFormatter.format_as_tree(graph)
    elif args.output_format == 'list':
        output = OutputFormatter.format_as_list(graph)
    else:  # json (default)
        output = OutputFormatter.format_as_json(graph)

    return _write_output(output, args.output)


def _report_graph_error(e: Exception) -> int:
    logger.error(f"Error reading graph: {e}")
    print(f"Error reading graph: {e}", file=sys.stderr)
    return 1


def handle_details(args):
    """Handle the 'details' subcommand."""
    setup_logging(args.verbose, args.loglevel)

    try:
        graph = FileParser.parse_graph_file(args.graph)
    except INPUT_READ_ERRORS as e:
        return _report_graph_error(e)

    node = graph.get_node(args.node_id)
    if node is None:
        print(f"Node not found: {args.node_id}", file=sys.stderr)
        return 1

    details = describe_node(node)
    print(details.to_markdown() if args.markdown else details.to_text(), end='')
    return 0


def handle_stats(args):
    setup_logging(args.verbose, args.loglevel)
    try:
        show_stats(args.graph)
    except INPUT_READ_ERRORS as e:
        return _report_graph_error(e)
    return 0


def handle_validate(args):
    setup_logging(args.verbose, args.loglevel)
    try:
        return 0 if validate_graph(args.graph) else 1
    except INPUT_READ_ERRORS as e:
        return _report_graph_error(e)


def handle_compare(args):
    setup_logging(args.verbose, args.loglevel)
    try:
        compare_graphs(args.graph1, args.graph2)
    except INPUT_READ_ERRORS as e:
        return _report_graph_error(e)
    return 0


def _add_logging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    parser.add_argument('--loglevel', choices=LOG_LEVELS, help='Set log level')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mfgraph',
        description='Consolidated dependency graphs for Module Federation applications'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Subcommands')

    # Build command
    build_parser_ = subparsers.add_parser('build', help='Build a dependency graph from extracted configurations')
    build_parser_.add_argument('input', help='Configuration snapshot (JSON file or http(s) URL)')
    build_parser_.add_argument('output', nargs='?', default='-',
                               help='Output file (default: stdout, use - for stdout)')
    build_parser_.add_argument('--format', dest='output_format', default='json',
                               choices=['json', 'node-link', 'tree', 'list'],
                               help='Output format (json, node-link, tree, list). Default: json')
    build_parser_.add_argument('--resolver', default=DEFAULT_STRATEGY, choices=list(STRATEGIES),
                               help=f'How remote names are matched to applications. Default: {DEFAULT_STRATEGY}')
    _add_logging_args(build_parser_)
    build_parser_.set_defaults(func=handle_build)

    # Details command
    details_parser = subparsers.add_parser('details', help='Show the details of one node of a saved graph')
    details_parser.add_argument('graph', help='Graph file written with --format json')
    details_parser.add_argument('node_id', help='Node id')
    details_parser.add_argument('--markdown', action='store_true', help='Print as markdown')
    _add_logging_args(details_parser)
    details_parser.set_defaults(func=handle_details)

    # Stats command
    stats_parser = subparsers.add_parser('stats', help='Show statistics of a saved graph')
    stats_parser.add_argument('graph', help='Graph file written with --format json')
    _add_logging_args(stats_parser)
    stats_parser.set_defaults(func=handle_stats)

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Check the structure of a saved graph')
    validate_parser.add_argument('graph', help='Graph file written with --format json')
    _add_logging_args(validate_parser)
    validate_parser.set_defaults(func=handle_validate)

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Compare two saved graphs')
    compare_parser.add_argument('graph1', help='First graph file')
    compare_parser.add_argument('graph2', help='Second graph file')
    _add_logging_args(compare_parser)
    compare_parser.set_defaults(func=handle_compare)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Execute command
    try:
        return args.func(args)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
