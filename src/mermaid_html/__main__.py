"""CLI entry point for mermaid-html."""

import logging
import sys
import tomllib
from dataclasses import replace

import click

from mermaid_html.config import PRESETS, MermaidConfig
from mermaid_html.render import render_markdown_diagrams, render_markdown_page
from mermaid_html.types import Cdn, Custom, SecurityLevel, Theme

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING if verbose == 0 else logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT, stream=sys.stderr)


def _load_config(path: str | None, preset: str) -> MermaidConfig:
    base = PRESETS[preset]
    if path is None:
        return base
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        click.echo(f"error: cannot read '{path}': {e}", err=True)
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        click.echo(f"error: invalid config '{path}': {e}", err=True)
        sys.exit(1)
    try:
        return MermaidConfig.from_mapping(data.get("mermaid", data), base=base)
    except (TypeError, ValueError) as e:
        click.echo(f"error: invalid config '{path}': {e}", err=True)
        sys.exit(1)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--config", "-c", "config_path", type=str, default=None, help="TOML file with a [mermaid] table")
@click.option(
    "--preset", type=click.Choice(sorted(PRESETS)), default="default", show_default=True, help="Starting configuration"
)
@click.option("--theme", type=click.Choice([t.value for t in Theme]), default=None, help="Diagram theme")
@click.option(
    "--security-level", type=click.Choice([s.value for s in SecurityLevel]), default=None, help="Library security level"
)
@click.option("--cdn", "cdn_version", type=str, default=None, help="Load the library from the CDN at this version")
@click.option("--script-url", type=str, default=None, help="Load the library from this URL")
@click.option("--disable", is_flag=True, help="Emit diagrams as plain code blocks")
@click.option("--standalone/--fragment", default=True, help="Wrap output in a full HTML page (default) or not")
@click.option("--title", type=str, default="Mermaid Diagrams", help="Page title for --standalone")
@click.option("--verbose", "-v", count=True, help="Log progress to stderr (-vv for debug)")
def main(
    input: str | None,
    output: str | None,
    config_path: str | None,
    preset: str,
    theme: str | None,
    security_level: str | None,
    cdn_version: str | None,
    script_url: str | None,
    disable: bool,
    standalone: bool,
    title: str,
    verbose: int,
) -> None:
    """Render Mermaid diagrams in a markdown document to HTML."""
    _setup_logging(verbose)

    if cdn_version is not None and script_url is not None:
        click.echo("error: --cdn and --script-url are mutually exclusive", err=True)
        sys.exit(1)

    config = _load_config(config_path, preset)
    changes: dict[str, object] = {}
    if theme is not None:
        changes["theme"] = Theme(theme)
    if security_level is not None:
        changes["security_level"] = SecurityLevel(security_level)
    if cdn_version is not None:
        changes["load_strategy"] = Cdn(version=cdn_version)
    if script_url is not None:
        changes["load_strategy"] = Custom(url=script_url)
    if disable:
        changes["enabled"] = False
    config = replace(config, **changes)

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    if standalone:
        rendered = render_markdown_page(text, config, title=title)
    else:
        rendered = render_markdown_diagrams(text, config)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
