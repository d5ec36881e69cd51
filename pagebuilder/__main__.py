"""CLI entry point for pagebuilder.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the core modules: compiling style maps,
validating persisted page trees and creating elements.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError as ModelValidationError

from pagebuilder.compiler import compile_utility_classes
from pagebuilder.config import get_environment, get_log_level, list_environment_variables
from pagebuilder.core import CompilationError, get_logger, setup_logging
from pagebuilder.factory import ElementFactory
from pagebuilder.model import ElementTemplate, dump_tree, export_json_schema, load_tree
from pagebuilder.schema import export_element_enum_schema
from pagebuilder.validation import validate_tree

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


def _read_json(path: Path):
    """Read a JSON document, logging instead of raising on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
    return None


def _write_output(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Saved to {output}")
    else:
        print(text)


# =============================================================================
# Compile Command
# =============================================================================


def cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile command."""
    styles = _read_json(args.styles)
    if styles is None:
        return 1

    try:
        classes = compile_utility_classes(styles, unit=args.unit)
    except CompilationError as e:
        logger.error(f"Compilation failed: {e}")
        return 1

    _write_output(classes, args.output)
    return 0


def handle_compile_command(argv: list[str]) -> int:
    """Handle compile command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python -m pagebuilder compile",
        description="Compile a responsive style map (JSON) to utility classes",
    )
    parser.add_argument("styles", type=Path, help="JSON file: breakpoint -> declarations")
    parser.add_argument(
        "--unit",
        choices=["px", "rem", "em"],
        default=None,
        help="Unit for bare numbers (default: PAGEBUILDER_DEFAULT_UNIT)",
    )
    parser.add_argument("--output", "-o", type=Path, help="Write classes to file")
    return cmd_compile(parser.parse_args(argv))


# =============================================================================
# Validate Command
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    data = _read_json(args.tree)
    if data is None:
        return 1

    try:
        tree = load_tree(data)
    except ModelValidationError as e:
        logger.error(f"Malformed page tree: {e}")
        return 1

    errors = validate_tree(tree)
    if not errors:
        logger.info(f"{args.tree}: valid")
        return 0

    for error in errors:
        print(f"[{error.error_type}] {error.node_id}: {error.message}")
    logger.error(f"{args.tree}: {len(errors)} error(s)")
    return 1


def handle_validate_command(argv: list[str]) -> int:
    """Handle validate command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python -m pagebuilder validate",
        description="Check a persisted page tree for structural errors",
    )
    parser.add_argument("tree", type=Path, help="JSON file: root element or list of roots")
    return cmd_validate(parser.parse_args(argv))


# =============================================================================
# Create Command
# =============================================================================


def cmd_create(args: argparse.Namespace) -> int:
    """Handle the create command."""
    factory = ElementFactory()

    if args.template:
        data = _read_json(args.template)
        if data is None:
            return 1
        try:
            template = ElementTemplate.model_validate(data)
        except ModelValidationError as e:
            logger.error(f"Malformed template: {e}")
            return 1
        element = factory.create_from_template(template, args.page_id, args.parent_id)
    else:
        if not args.type:
            logger.error("Either an element type or --template is required")
            return 1
        element = factory.create(args.type, args.page_id, args.parent_id)

    if element is None:
        return 1

    _write_output(json.dumps(dump_tree([element])[0], indent=2), args.output)
    return 0


def handle_create_command(argv: list[str]) -> int:
    """Handle create command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python -m pagebuilder create",
        description="Create an element with its kind's defaults",
    )
    parser.add_argument("type", nargs="?", help="Element type (e.g. Frame, Text)")
    parser.add_argument("--page-id", required=True, help="Owning page id")
    parser.add_argument("--parent-id", default=None, help="Parent container id")
    parser.add_argument("--template", type=Path, help="Clone a JSON element template")
    parser.add_argument("--output", "-o", type=Path, help="Write element JSON to file")
    return cmd_create(parser.parse_args(argv))


# =============================================================================
# Schema Command
# =============================================================================


def cmd_schema(args: argparse.Namespace) -> int:
    """Handle the schema command."""
    schema = export_element_enum_schema() if args.types else export_json_schema()
    _write_output(json.dumps(schema, indent=2), args.output)
    return 0


def handle_schema_command(argv: list[str]) -> int:
    """Handle schema command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python -m pagebuilder schema",
        description="Export the persisted element JSON Schema",
    )
    parser.add_argument(
        "--types", action="store_true", help="Export only the element type enum"
    )
    parser.add_argument("--output", "-o", type=Path, help="Write schema to file")
    return cmd_schema(parser.parse_args(argv))


# =============================================================================
# Environment Command
# =============================================================================


def cmd_env(argv: list[str]) -> int:
    """List configuration variables with their current values."""
    category = argv[0] if argv else None
    variables = list_environment_variables(category)
    if not variables:
        logger.error(f"Unknown category: {category}")
        return 1

    for var in variables:
        info = var.value
        print(f"{info.name} = {get_environment(var)!r}")
        print(f"    [{info.category}] {info.description} (default: {info.default!r})")
    return 0


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments.

    Usage:
        python -m pagebuilder test            # Run all tests
        python -m pagebuilder test --unit     # Run only unit tests
        python -m pagebuilder test -k "swap"  # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python -m pagebuilder {command} [args]")
    print("\n=== Styles ===")
    print("  compile    Compile a responsive style map to utility classes")
    print("\n=== Page Trees ===")
    print("  validate   Check a page tree for structural errors")
    print("  create     Create an element (or clone a template) as JSON")
    print("  schema     Export the element JSON Schema")
    print("\n=== Development ===")
    print("  env        List configuration variables")
    print("  test       Run the test suite")
    print("\nExamples:")
    print("  python -m pagebuilder compile styles.json")
    print("  python -m pagebuilder validate page.json")
    print("  python -m pagebuilder create Frame --page-id home")
    print("  python -m pagebuilder env editor")
    print("  python -m pagebuilder test --unit")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "compile": lambda: handle_compile_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "create": lambda: handle_create_command(rest_args),
        "schema": lambda: handle_schema_command(rest_args),
        "env": lambda: cmd_env(rest_args),
        "test": lambda: cmd_test(rest_args),
    }

    if command in commands:
        setup_logging(get_log_level())
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
