"""
SUBST Plugin Main Module.

Renders every template file found in an input directory against a JSON
context and writes the results to an output directory, preserving relative
paths. Runs as a ChRIS plugin or as a plain command.

Examples:
    Render all *.tmpl files:
        $ subst --context context.json inputdir/ outputdir/

    Custom symbols, stop at the first broken template:
        $ subst --tokens '«»‹›|=' --throws --pattern '**/*.txt' in/ out/

Note:
    Defaults for --tokens, --throws and --pattern come from the environment
    (SUBST_TOKENS, SUBST_THROWS, SUBST_PATTERN). --no-throws overrides
    SUBST_THROWS=true.
    A trailing ".tmpl" suffix is dropped from output file names.
"""

from pathlib import Path
from argparse import (
    ArgumentDefaultsHelpFormatter,
    ArgumentParser,
    BooleanOptionalAction,
    Namespace,
)
from chris_plugin import chris_plugin
from rich.table import Table
from subst.config.settings import appsettings, console
from subst.lib.engine import Engine, configure
from subst.lib.log import LOG
from subst.models.dataModel import RenderResult
from typing import Any, Final
import json
import sys

__version__: Final[str] = "0.1.0"

TEMPLATE_SUFFIX: Final[str] = ".tmpl"

parser: Final[ArgumentParser] = ArgumentParser(
    description="Render grapheme-aware string templates against a JSON context.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "--context", type=str, default="", help="JSON file holding the context object"
)
parser.add_argument(
    "--pattern",
    type=str,
    default=appsettings.pattern,
    help="Glob selecting template files under the input directory",
)
parser.add_argument(
    "--tokens",
    type=str,
    default=appsettings.tokens,
    help="Six symbols: variable start/end, group start/end, filter, param",
)
parser.add_argument(
    "--throws",
    action=BooleanOptionalAction,
    default=appsettings.throws,
    help="Stop at the first template that fails to render",
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def context_load(name: str, inputdir: Path) -> Any:
    """Load the render context from a JSON file.

    Args:
        name: File name; relative names resolve against inputdir
        inputdir: Plugin input directory

    Returns:
        The decoded JSON value, or an empty dict when no file is given

    Raises:
        ValueError: If the file is not valid JSON
    """
    if not name:
        return {}
    path: Path = Path(name)
    if not path.is_absolute():
        path = inputdir / path
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Context file {path} is not valid JSON: {e}") from e


def outputPath_get(template: Path, inputdir: Path, outputdir: Path) -> Path:
    """Map a template file to its output location.

    Example:
        in/letters/a.txt.tmpl -> out/letters/a.txt
    """
    relative: Path = template.relative_to(inputdir)
    if relative.suffix == TEMPLATE_SUFFIX:
        relative = relative.with_suffix("")
    return outputdir / relative


def templates_render(
    options: Namespace, inputdir: Path, outputdir: Path
) -> dict[Path, RenderResult]:
    """Render every matching template under inputdir into outputdir.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory searched with options.pattern
        outputdir: Directory receiving rendered files

    Returns:
        Render result per template file, in processing order. With
        options.throws, processing stops after the first failure.
    """
    engine: Engine = configure(tokens=options.tokens)
    context: Any = context_load(options.context, inputdir)
    results: dict[Path, RenderResult] = {}

    for template in sorted(inputdir.glob(options.pattern)):
        if not template.is_file():
            continue
        LOG(f"Rendering {template}")
        try:
            text: str = template.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            LOG(f"Reading {template} failed: {e}")
            result: RenderResult = RenderResult(
                text="", error=f"Cannot read template: {e}", success=False
            )
        else:
            result = engine.render_result(text, context)
        results[template] = result
        if not result.success:
            if options.throws:
                break
            continue
        destination: Path = outputPath_get(template, inputdir, outputdir)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(result.text, encoding="utf-8")

    return results


def summary_print(results: dict[Path, RenderResult], inputdir: Path) -> None:
    """Print a table of rendered and failed templates."""
    table: Table = Table(title="subst")
    table.add_column("Template", style="cyan")
    table.add_column("Status")
    table.add_column("Error", style="red")
    for template, result in results.items():
        status: str = "[green]ok[/green]" if result.success else "[red]failed[/red]"
        table.add_row(
            str(template.relative_to(inputdir)), status, result.error or ""
        )
    console.print(table)


@chris_plugin(
    parser=parser,
    title="pl-subst",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing template files
        outputdir: Directory for rendered files
    """
    try:
        results: dict[Path, RenderResult] = templates_render(
            options, inputdir, outputdir
        )
    except (OSError, ValueError) as e:
        LOG(f"Rendering aborted: {e}")
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    if not results:
        console.print(
            f"[bold yellow]No templates matching {options.pattern}[/bold yellow]"
        )
        return

    summary_print(results, inputdir)
    if not all(result.success for result in results.values()):
        sys.exit(1)
