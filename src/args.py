"""Argument parsing functionality for flowdef."""

import argparse


def _add_common(parser):
    """Options shared by every subcommand."""
    parser.add_argument("-f", "--flow-version",
                        dest="FLOW_VERSION",
                        help="The version of Flow fetched libdefs must be compatible with (e.g. 0.24.0)",
                        action="store",
                        type=str)
    parser.add_argument("--definitions-dir",
                        dest="DEFINITIONS_DIR",
                        help="Local library definitions directory (defaults to ~/.flowdef/cache)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def build_parser():
    """Build the top-level parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="flowdef",
        description="flowdef - install Flow library definitions into a project",
        add_help=True,
    )
    sub = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    sub.required = True

    install = sub.add_parser("install",
                             help="Installs a libdef to the ./flow-typed directory")
    install.add_argument("QUERY",
                         help="Library definition to install (example: lodash, or lodash@4.2.1)",
                         nargs="?",
                         type=str)
    install.add_argument("--all",
                         dest="ALL",
                         help="Install type definitions for all packages in package.json",
                         action="store_true")
    install.add_argument("-o", "--overwrite",
                         dest="OVERWRITE",
                         help="Overwrite a libdef if it is already present in the `flow-typed` directory",
                         action="store_true")
    _add_common(install)

    search = sub.add_parser("search",
                            help="List libdefs matching a query, best match first")
    search.add_argument("QUERY",
                        help="Library definition to look up (example: lodash, or lodash@4.2.1)",
                        nargs="?",
                        type=str)
    _add_common(search)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
