#!/usr/bin/env python3
"""
Glossterm CLI Interface
Expand glossary shortcodes in Markdown files and inspect glossary files
"""

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from glossterm import __version__
from glossterm.core.config import GlosstermSettings
from glossterm.core.document import dependency_tags, render_document
from glossterm.core.exceptions import GlossaryError
from glossterm.core.resolver import RenderSession
from glossterm.core.source import read_definitions
from glossterm.core.nodes import stringify

console = Console()
err_console = Console(stderr=True)

ASSETS_DIR = Path(__file__).parent / "assets"


def setup_logging(level: str):
    """Send log records through rich on stderr"""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


class GlosstermCLI:
    """Command-line interface for the glossary filter"""

    def __init__(self, settings: GlosstermSettings):
        self.settings = settings
        self.session = RenderSession(backend=settings.backend, settings=settings)

    def render_files(self, file_paths: List[str], output_dir: Optional[str] = None) -> int:
        """Render files in order, sharing one term registry across all of them"""
        failed = 0
        out_dir = Path(output_dir) if output_dir else None
        if out_dir:
            out_dir.mkdir(parents=True, exist_ok=True)

        for file_path in file_paths:
            path = Path(file_path)
            try:
                text = path.read_text(encoding="utf-8")
                result = render_document(text, self.session)
            except (OSError, GlossaryError) as e:
                err_console.print(f"❌ Error with {file_path}: {str(e)}", style="red")
                failed += 1
                continue

            output = result.text
            if result.dependencies:
                output = dependency_tags(result.dependencies) + "\n\n" + output

            if out_dir is None:
                sys.stdout.write(output)
                continue

            target = out_dir / path.name
            target.write_text(output, encoding="utf-8")
            if result.dependencies:
                self.copy_assets(out_dir)
            err_console.print(f"✅ Rendered {path.name}: {result.occurrences} glossary terms")

        if failed:
            err_console.print(f"\n⚠️  {failed} files failed to render", style="yellow")
        return 1 if failed else 0

    def copy_assets(self, out_dir: Path):
        """Copy the popover stylesheet and script next to the rendered files"""
        for dependency in self.session.dependencies.values():
            for name in dependency.stylesheets + dependency.scripts:
                shutil.copyfile(ASSETS_DIR / name, out_dir / name)

    def lookup(self, term: str) -> int:
        """Print the definition of a single term"""
        definitions = read_definitions(self.settings.definitions_path)
        key = term.lower()
        if key not in definitions:
            console.print(f"No definition for '{term}' in {self.settings.definitions_path}", style="yellow")
            return 1
        console.print(f"[bold cyan]{escape(key)}[/bold cyan]: {escape(stringify(definitions[key]))}")
        return 0

    def list_terms(self) -> int:
        """Print every term in the definitions file as a table"""
        definitions = read_definitions(self.settings.definitions_path)
        terms = sorted({key.lower() for key in definitions})

        table = Table(title=f"Glossary ({self.settings.definitions_path})")
        table.add_column("Term", style="cyan", no_wrap=True)
        table.add_column("Definition")
        for term in terms:
            table.add_row(escape(term), escape(stringify(definitions[term])))

        console.print(table)
        console.print(f"{len(terms)} terms", style="green")
        return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glossterm",
        description="Glossterm - glossary shortcodes with popovers and footnotes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Expand shortcodes for an HTML site, writing into _site/
  glossterm render intro.md chapter1.md --output-dir _site

  # Footnote style for print formats
  glossterm render intro.md --to latex

  # Look up a term
  glossterm lookup cli --glossary glossary.yml
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", "-c", help="YAML settings file")
    parser.add_argument("--glossary", "-g", help="Definitions file (default: glossary.yml)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Expand glossary shortcodes in Markdown files")
    render.add_argument("files", nargs="+", help="Markdown files, rendered in the given order")
    render.add_argument("--to", "-t", help="Output format (html, latex, docx, ...)")
    render.add_argument("--output-dir", "-o", help="Directory for rendered files (default: stdout)")

    lookup = subparsers.add_parser("lookup", help="Show the definition of a term")
    lookup.add_argument("term")

    subparsers.add_parser("list", help="List every term in the definitions file")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        settings = GlosstermSettings.load_from_file(args.config) if args.config else GlosstermSettings()
    except GlossaryError as e:
        err_console.print(f"❌ {str(e)}", style="red")
        return 2

    if args.glossary:
        settings.definitions_path = args.glossary
    if getattr(args, "to", None):
        settings.backend = args.to
    if args.verbose:
        settings.log_level = "DEBUG"

    setup_logging(settings.log_level)

    try:
        cli = GlosstermCLI(settings)
        if args.command == "render":
            return cli.render_files(args.files, args.output_dir)
        if args.command == "lookup":
            return cli.lookup(args.term)
        return cli.list_terms()
    except GlossaryError as e:
        err_console.print(f"❌ {str(e)}", style="red")
        return 1


if __name__ == "__main__":
    sys.exit(main())
