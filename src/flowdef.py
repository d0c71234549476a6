"""flowdef - install Flow library definitions into a project.

    Returns:
        int: Exit code
"""
import asyncio
import logging
import os
import sys

from args import parse_args
from catalog.provider import LocalCatalog
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes, resolve_settings
from errors import FlowdefError, ProjectRootNotFound
from installer.dependencies import list_dependencies
from installer.install import find_project_root, install_all, install_definition
from versioning.parser import normalize_compiler_version, parse_query
from versioning.resolver import resolve

logger = logging.getLogger(__name__)


def fail_with_message(message):
    """Log ``message`` as an error and return the failure exit code."""
    logger.error(message)
    return ExitCodes.FAILURE.value


def _setup_logging(args):
    """Configure logging from CLI arguments; --loglevel wins over the environment."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def _run_install(args, settings, flow_version, catalog):
    overwrite = settings["overwrite"]
    if getattr(args, "ALL", False):
        cwd = os.getcwd()
        project_root = find_project_root(cwd)
        if project_root is None:
            raise ProjectRootNotFound(cwd)
        tokens = list_dependencies(project_root)
        if not tokens:
            logger.warning("No dependencies found in %s.", Constants.PACKAGE_JSON_FILE)
            return ExitCodes.SUCCESS.value
        results, failures = asyncio.run(
            install_all(tokens, flow_version, catalog, overwrite=overwrite, cwd=cwd)
        )
        for token, err in failures:
            logger.error("%s: %s", token, err)
        logger.info("Installed %d of %d libdefs.", len(results), len(tokens))
        return ExitCodes.FAILURE.value if failures else ExitCodes.SUCCESS.value

    install_definition(args.QUERY, flow_version, catalog, overwrite=overwrite)
    return ExitCodes.SUCCESS.value


def _run_search(args, flow_version, catalog):
    query = parse_query(args.QUERY, flow_version)
    matches = resolve(catalog.load(), query)
    if not matches:
        logger.info("No libdefs found for %s that work with flow@%s.", args.QUERY, flow_version)
        return ExitCodes.SUCCESS.value
    for defn in matches:
        print(f"{defn.pkg_name}\t{defn.pkg_version_str}\tflow_{defn.flow_version_str}")
    return ExitCodes.SUCCESS.value


def run(args):
    """Execute a parsed command and return its exit code."""
    command = args.COMMAND
    if not args.QUERY and not getattr(args, "ALL", False):
        if command == "install":
            return fail_with_message(
                "Please provide a libdef name (example: lodash, or lodash@4.2.1) "
                "or use --all to install all available libdefs for your dependencies"
            )
        return fail_with_message("Please provide a libdef name (example: lodash, or lodash@4.2.1)")

    settings = resolve_settings(args)
    if not settings["flow_version"]:
        return fail_with_message("Please provide a flow version (example: --flow-version 0.24.0)")

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=command),
        )

    try:
        flow_version = normalize_compiler_version(settings["flow_version"])
        catalog = LocalCatalog(settings["definitions_dir"])
        if command == "search":
            return _run_search(args, flow_version, catalog)
        return _run_install(args, settings, flow_version, catalog)
    except (FlowdefError, OSError, UnicodeDecodeError) as e:
        return fail_with_message(str(e))


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
