# Code Doctor - Detect duplicated logic and suggest refactorings
# Copyright (C) 2025  Jonathan Louis
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
CLI entry point for code-doctor.

Usage:
    code-doctor <file> [options]
    code-doctor --help
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import (
    DEFAULT_FUNCTION_NAME,
    LONG_METHOD_THRESHOLD,
    LONG_PARAMETER_THRESHOLD,
    SIMILARITY_THRESHOLD,
    DetectorConfig,
    load_config,
)
from .engine import analyze_source, scan_source
from .errors import CodeDoctorError
from .languages import detect_language, get_parser
from .reporter import OutputFormat, report_analysis
from .smells import detect_long_methods, detect_long_parameter_lists


CHECK_DUPLICATES = "duplicates"
CHECK_LONG_METHOD = "long-method"
CHECK_LONG_PARAMETERS = "long-parameter-list"
ALL_CHECKS = (CHECK_DUPLICATES, CHECK_LONG_METHOD, CHECK_LONG_PARAMETERS)

# Extension to output format mapping for -o FILE.EXT
EXTENSION_FORMAT_MAP = {
    '.md': 'markdown',
    '.json': 'json',
    '.txt': 'text',
}


def merge_config_with_cli(
    config: dict,
    cli_value,
    config_key: str,
    default_value,
):
    """
    Merge config file value with CLI value.

    If CLI value differs from default, use CLI (user explicitly set it).
    Otherwise, use config value if present, else use default.
    """
    if cli_value != default_value:
        return cli_value

    return config.get(config_key, default_value)


def _fail(message: str) -> None:
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


@click.command()
@click.argument("file", type=click.Path(exists=True, file_okay=True, dir_okay=False))
@click.option(
    "-c", "--check",
    "checks",
    type=click.Choice(ALL_CHECKS),
    multiple=True,
    help="Check to run (repeatable, default: all)"
)
@click.option(
    "-t", "--threshold",
    type=float,
    default=SIMILARITY_THRESHOLD,
    help=f"Type-1 similarity threshold 0.0-1.0 (default: {SIMILARITY_THRESHOLD})"
)
@click.option(
    "--all-pairs/--first-pair",
    default=False,
    help="Compare every pair of functions instead of the first two (default: first pair)"
)
@click.option(
    "--function-name",
    type=str,
    default=DEFAULT_FUNCTION_NAME,
    help=f"Name for the extracted function (default: {DEFAULT_FUNCTION_NAME})"
)
@click.option(
    "--long-method-lines",
    type=int,
    default=LONG_METHOD_THRESHOLD,
    help=f"Executable lines above which a function is long (default: {LONG_METHOD_THRESHOLD})"
)
@click.option(
    "--long-parameter-count",
    type=int,
    default=LONG_PARAMETER_THRESHOLD,
    help=f"Parameters above which a list is long (default: {LONG_PARAMETER_THRESHOLD})"
)
@click.option(
    "-l", "--lang",
    type=str,
    default=None,
    help="Force language detection"
)
@click.option(
    "-o", "--output",
    type=str,
    default=None,
    help="Output file path (e.g., report.md, report.json, report.txt)"
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show debug logging"
)
@click.version_option(version=__version__)
def main(
    file: str,
    checks: tuple,
    threshold: float,
    all_pairs: bool,
    function_name: str,
    long_method_lines: int,
    long_parameter_count: int,
    lang: Optional[str],
    output: Optional[str],
    verbose: bool,
):
    """
    Find duplicated logic and other smells in a JavaScript file.

    FILE is the source file to analyze.

    Examples:

      # All checks, text report on stdout
      code-doctor app.js

      # Duplicates only, across every pair of functions
      code-doctor app.js -c duplicates --all-pairs

      # Markdown report
      code-doctor app.js -o report.md
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    file_path = Path(file).resolve()

    # Config values override defaults, but explicit CLI args override config
    file_config = load_config(file_path)
    config = DetectorConfig.from_mapping(file_config)
    config.similarity_threshold = merge_config_with_cli(
        file_config, threshold, "similarity_threshold", SIMILARITY_THRESHOLD)
    config.all_pairs = merge_config_with_cli(file_config, all_pairs, "all_pairs", False)
    config.function_name = merge_config_with_cli(
        file_config, function_name, "function_name", DEFAULT_FUNCTION_NAME)
    config.long_method_lines = merge_config_with_cli(
        file_config, long_method_lines, "long_method_lines", LONG_METHOD_THRESHOLD)
    config.long_parameter_count = merge_config_with_cli(
        file_config, long_parameter_count, "long_parameter_count", LONG_PARAMETER_THRESHOLD)

    if verbose and file_config:
        click.echo("📝 Loaded config from .codedoctorrc/.code-doctor.toml")

    output_format = OutputFormat.TEXT
    if output:
        ext = Path(output).suffix.lower()
        if ext not in EXTENSION_FORMAT_MAP:
            valid_exts = ', '.join(EXTENSION_FORMAT_MAP.keys())
            _fail(f"Invalid output extension '{ext}'. Valid: {valid_exts}")
        output_format = OutputFormat(EXTENSION_FORMAT_MAP[ext])

    language = lang or detect_language(file_path)
    if not language:
        _fail(f"Unsupported file type: {file_path.suffix or file_path.name}")

    try:
        parser = get_parser(language, max_depth=config.max_depth)
    except CodeDoctorError as e:
        _fail(str(e))

    source = file_path.read_text(encoding="utf-8", errors="replace")
    selected = set(checks or ALL_CHECKS)

    results = long_methods = long_parameters = None
    try:
        if CHECK_DUPLICATES in selected:
            if config.all_pairs:
                results = scan_source(source, config, parser)
            else:
                results = [analyze_source(source, config, parser)]
        if CHECK_LONG_METHOD in selected:
            long_methods = detect_long_methods(source, parser, config.long_method_lines)
        if CHECK_LONG_PARAMETERS in selected:
            long_parameters = detect_long_parameter_lists(source, parser, config.long_parameter_count)
    except CodeDoctorError as e:
        _fail(f"Error processing the file: {e}")

    report = report_analysis(
        path=file_path,
        results=results,
        output_format=output_format,
        long_methods=long_methods,
        long_parameters=long_parameters,
    )

    if output:
        Path(output).write_text(report)
        click.echo(f"✅ Report written to: {output}")
    else:
        click.echo(report)


# Entry point alias for pyproject.toml
cli = main


if __name__ == "__main__":
    main()
