#!/usr/bin/env python3
"""
SemantEco Command Line Interface

Loads the configured module pipeline and lets an operator inspect composed
queries or invoke module query methods against the configured endpoint.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List

from tabulate import tabulate

from semanteco.client.config.config_loader import ClientConfigurationError, SemantEcoConfig
from semanteco.module.pipeline import ModulePipeline, UnknownQueryMethodError
from semanteco.module.request import ModuleConfigurationError, Request
from semanteco.query.query import RDF_NS, VAR_NS, QueryType
from semanteco.providers.vocab import POL_NS, SITE_VAR


def parse_params(values: List[str]) -> Dict[str, str]:
    """Parse repeated key=value options into a parameter mapping."""
    params = {}
    for item in values or []:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected key=value, got '{item}'")
        params[key] = value
    return params


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments for the SemantEco CLI."""
    parser = argparse.ArgumentParser(
        description="SemantEco - compose and run module queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  semanteco --param state=CO compose           # Show the composed site query
  semanteco methods                            # List module query methods
  semanteco call "Water Data Provider" query_for_data_sources --table
  semanteco -p state=CO -p county=001 -p stateCode=08 data-query "Air Data Provider"
        """
    )

    parser.add_argument("--config", "-c", type=str,
                        help="Path to SemantEco configuration file (default: auto-detected)")
    parser.add_argument("--param", "-p", action="append", default=[],
                        help="Request parameter as key=value (repeatable)")
    parser.add_argument("--version", action="version", version="SemantEco 1.0.0")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("compose", help="Print the site listing query after every module visited it")
    sub.add_parser("methods", help="List the query methods exposed by registered modules")
    sub.add_parser("domains", help="List the domains provided by registered modules")

    call = sub.add_parser("call", help="Invoke a module query method")
    call.add_argument("module", help="Module name, e.g. 'Water Data Provider'")
    call.add_argument("method", help="Query method name")
    call.add_argument("--table", action="store_true", help="Render the data entries as a table")

    data_query = sub.add_parser("data-query", help="Print a provider's measurement CONSTRUCT query")
    data_query.add_argument("module", help="Module name")

    return parser.parse_args(argv)


def compose_site_query(pipeline: ModulePipeline, request: Request) -> str:
    query = pipeline.configuration.get_query_factory().new_query(QueryType.SELECT)
    site = query.get_variable(VAR_NS + SITE_VAR)
    query.set_variables([site])
    query.set_distinct(True)
    query.where.add_pattern(site, query.get_resource(RDF_NS + "type"),
                            query.get_resource(POL_NS + "MeasurementSite"))
    pipeline.visit_query(query, request)
    return query.to_sparql()


def run(args: argparse.Namespace) -> int:
    config = SemantEcoConfig(args.config)
    config.validate_config()
    logging.basicConfig(
        level=getattr(logging, config.get_log_level(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    pipeline = ModulePipeline.from_config(config)
    request = Request(parse_params(args.param))

    if args.command == "compose":
        print(compose_site_query(pipeline, request))
    elif args.command == "methods":
        print(tabulate(pipeline.list_query_methods(), headers=["Module", "Method"]))
    elif args.command == "domains":
        rows = [(d.label, d.uri, len(d.sources), len(d.regulations), len(d.data_types))
                for d in pipeline.get_domains(request)]
        print(tabulate(rows, headers=["Label", "URI", "Sources", "Regulations", "Data Types"]))
    elif args.command == "call":
        response = pipeline.invoke_query_method(args.module, args.method, request)
        document = response.model_dump(exclude_none=True)
        if args.table and document.get("data"):
            print(tabulate(document["data"], headers="keys"))
        else:
            print(json.dumps(document, indent=2))
        return 0 if document.get("success") else 1
    elif args.command == "data-query":
        module = pipeline.get_module(args.module)
        if module is None or not hasattr(module, "build_data_query"):
            print(f"No data provider named '{args.module}'", file=sys.stderr)
            return 1
        print(module.build_data_query(request).to_sparql())
    return 0


def main(argv=None):
    """Main entry point for the SemantEco CLI."""
    try:
        args = parse_args(argv)
        sys.exit(run(args))
    except (ClientConfigurationError, ModuleConfigurationError, UnknownQueryMethodError,
            argparse.ArgumentTypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
