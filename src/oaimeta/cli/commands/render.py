"""Render and filter commands for the oaimeta CLI."""

from loguru import logger

from ...core.config import Config, MetadataFormat
from ...graph import PropertyGraph, RdfPropertyGraph, SparqlPropertyGraph
from ...metadata import producer_class
from ...services import RenderingService, to_string


def add_format_arguments(parser) -> None:
    """Add arguments shared by commands working on a metadata format."""
    parser.add_argument(
        "-f",
        "--format",
        required=True,
        dest="metadata_prefix",
        help="Metadata prefix of the format (as configured)",
    )


def handle_render(args, config: Config) -> None:
    """Handle render command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    fmt = config.get_format(args.metadata_prefix)
    if args.graph:
        _render(RdfPropertyGraph.from_file(args.graph, format=args.graph_format), args.resources, fmt)
        return

    logger.debug(f"Querying SPARQL endpoint {config.sparql.endpoint}")
    with SparqlPropertyGraph(config.sparql) as graph:
        _render(graph, args.resources, fmt)


def _render(graph: PropertyGraph, resources: list[str], fmt: MetadataFormat) -> None:
    service = RenderingService(graph)
    for resource in resources:
        print(to_string(service.render(resource, fmt)))


def handle_filter(args, config: Config) -> None:
    """Handle filter command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    fmt = config.get_format(args.metadata_prefix)
    producer = producer_class(fmt.producer)

    for fragment in (
        producer.extend_search_filter_query(fmt, args.res_var),
        producer.extend_search_data_query(fmt, args.res_var),
    ):
        if fragment:
            print(fragment)
