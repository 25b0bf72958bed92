import argparse
import logging
import sys
from typing import List, Optional

from basecmd_generator import __version__
from basecmd_generator.config_validation import load_config
from basecmd_generator.domain.naming import Inflector
from basecmd_generator.exceptions import GeneratorError
from basecmd_generator.generator import ModuleGenerator

from basecmd_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_highlight,
    log_progress,
    log_section,
    log_success,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="basegen",
        description="Generate and remove Base framework modules (model, service, controller, module).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a YAML configuration file. Defaults to .basegen.yaml in the project root if present.",
    )
    parser.add_argument(
        "--root",
        dest="project_root",
        help="Root directory of the Go project. Overrides config file setting.",
    )
    parser.add_argument(
        "--module-path",
        dest="module_path",
        help="Go module path used in imports (default: base). Overrides config file setting.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    generate = subparsers.add_parser(
        "generate",
        aliases=["g"],
        help="Generate a new module.",
        description="Generate a module from a model name and field:type[:RelatedModel] declarations.",
    )
    generate.add_argument("name", help="Model name, e.g. Post or product_category.")
    generate.add_argument(
        "fields",
        nargs="*",
        metavar="FIELD",
        help="Field declarations such as title:string author:belongsTo:User published_at.",
    )
    generate.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated files instead of writing them.",
    )
    generate.add_argument(
        "--validator",
        dest="generate_validator",
        action="store_const",
        const=True,
        default=None,
        help="Also generate validator.go for the module.",
    )
    generate.add_argument(
        "--no-format",
        dest="format_code",
        action="store_const",
        const=False,
        default=None,
        help="Do not run gofmt on the generated files.",
    )
    generate.set_defaults(handler=run_generate)

    destroy = subparsers.add_parser(
        "destroy",
        aliases=["d"],
        help="Remove generated modules.",
        description="Remove the module directory and model file and unregister the module.",
    )
    destroy.add_argument("names", nargs="+", metavar="NAME", help="Model names of the modules to remove.")
    destroy.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation.",
    )
    destroy.set_defaults(handler=run_destroy)

    return parser


def run_generate(generator: ModuleGenerator, args: argparse.Namespace) -> None:
    if args.dry_run:
        for path, content in generator.preview(args.name, args.fields).items():
            log_highlight(logger, f"{path}")
            print(content)
        return

    result = generator.generate(args.name, args.fields)
    logger.debug(f"Wrote {result.file_count} files for {result.model_name}")


def confirm(prompt: str) -> bool:
    """Ask a [Y/n] question; an empty answer means yes."""
    try:
        answer = input(f"{prompt} [Y/n] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("", "y", "yes")


def run_destroy(generator: ModuleGenerator, args: argparse.Namespace) -> None:
    found = generator.existing_modules(args.names)
    found_names = {naming.package_name for naming in found}
    for name in args.names:
        if not any(naming.original == name for naming in found):
            logger.warning(f"No module found for '{name}'")
    if not found:
        raise GeneratorError("Nothing to destroy", context={"names": ", ".join(args.names)})

    if not args.yes:
        listing = ", ".join(sorted(found_names))
        if not confirm(f"Remove module(s) {listing}?"):
            logger.info("Aborted.")
            return

    for naming in found:
        generator.destroy(naming.original)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)
    cli_logger = get_colored_logger(__name__)
    if args.verbose:
        cli_logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        log_section(cli_logger, f"basegen {args.command}")
        log_progress(cli_logger, "Loading configuration...")
        config = load_config(args.config, args)
        cli_logger.debug(f"Effective configuration: {config.model_dump()}")

        generator = ModuleGenerator(config, inflector=Inflector())
        args.handler(generator, args)
        log_success(cli_logger, "Done.")

    # --- Error Handling ---
    except GeneratorError as e:
        cli_logger.error(str(e), exc_info=args.verbose)
        sys.exit(1)
    except KeyboardInterrupt:
        cli_logger.error("Interrupted.")
        sys.exit(130)
    except Exception as e:
        cli_logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
