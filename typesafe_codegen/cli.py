"""
Command-line interface for previewing field generation.

Loads a type model document, generates every declared field and prints
the fragments, a summary table and any field errors.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.config import ConfigError, load_config
from .core.errors import TemplateSubstitutionError
from .core.schema import TypeModelError, load_type_model
from .logging_config import configure_logging
from .preview import render_preview
from .typesafe.generator import TypesafeGenerator
from .utils import JSONLoaderError, load_json

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="typesafe-codegen",
        description="Generate typesafe from-map code for the fields of a domain type model",
    )
    parser.add_argument("model", help="Type model JSON file or http(s) URL")
    parser.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )
    parser.add_argument(
        "--class-name",
        metavar="NAME",
        default="Generated",
        help="Class name used for the preview (default: Generated)",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Write the preview class to FILE instead of printing fragments",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Warnings only")
    return parser


def _print_summary(model, result) -> None:
    table = Table(title="Generated fields", box=box.SIMPLE)
    table.add_column("Key", style="cyan")
    table.add_column("Field")
    table.add_column("Template")
    table.add_column("Type", style="green")

    for declaration in model.fields:
        key = declaration.declared_key
        if key in result.errors:
            table.add_row(key, declaration.generated_name, "[red]error[/red]", "")
            continue
        fragment = result.fragments[key]
        table.add_row(
            key,
            declaration.generated_name,
            fragment.kind.value,
            fragment.type_representation or "",
        )
    console.print(table)


def run(args: argparse.Namespace) -> int:
    """Run generation for parsed arguments; returns the exit code."""
    try:
        config = load_config(config_file=args.config)
        source, data = load_json(args.model)
        model = load_type_model(data)
    except (ConfigError, JSONLoaderError, TypeModelError, FileNotFoundError) as e:
        console.print(f"❌ [red]{e}[/red]")
        return 1

    console.print(f"📄 Loaded: {source}")
    generator = TypesafeGenerator(model.index, config=config)

    try:
        result = generator.generate(model.fields)
    except TemplateSubstitutionError as e:
        console.print(f"❌ [red]Template error: {e}[/red]")
        return 1

    if args.output:
        fields = [generator.declared_field(d) for d in model.fields]
        preview = render_preview(args.class_name, fields, result)
        Path(args.output).write_text(preview, encoding="utf-8")
        console.print(f"✅ [green]Preview written to {args.output}[/green]")
    else:
        for key, fragment in result.fragments.items():
            if fragment.is_empty:
                continue
            console.print(
                Panel(
                    Syntax(fragment.to_source(), "python", theme="monokai"),
                    title=key,
                    expand=False,
                )
            )

    _print_summary(model, result)

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")
    for message in result.error_messages():
        console.print(f"❌ [red]{message}[/red]")

    return 0 if result.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
