"""CLI entry point for the test artifact generator."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from src.ai.client import BedrockClient, EndpointInvocationError, set_debug_dir
from src.ai.prompts.registry import MissingTemplateVariables, PromptRegistry, TemplateNotFound
from src.capture.dom_capture import DomCaptureError, capture_dom
from src.generator import ArtifactGenerator
from src.models.artifact import GenerationRequest
from src.models.config import DEFAULT_CONFIG_PATH, GeneratorConfig
from src.reporter.artifact_writer import write_artifact, write_manifest

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config: str) -> GeneratorConfig:
    path = Path(config)
    if not path.exists():
        if config != DEFAULT_CONFIG_PATH:
            console.print(f"[red]Config file not found: {config}[/red]")
            console.print("Run 'testgen init' to create a default config.")
            sys.exit(1)
        return GeneratorConfig()
    try:
        return GeneratorConfig.load(path)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        console.print(f"[red]Invalid config {escape(config)}: {escape(problems)}[/red]")
        sys.exit(1)


def _read_dom(
    cfg: GeneratorConfig,
    dom_file: Optional[str],
    url: Optional[str],
    selector: Optional[str],
) -> str:
    if dom_file:
        return Path(dom_file).read_text(encoding="utf-8")
    if url:
        try:
            return asyncio.run(capture_dom(
                url,
                selector=selector,
                wait_until=cfg.capture_wait_until,
                timeout_ms=cfg.capture_timeout_ms,
            ))
        except DomCaptureError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)
    console.print("[red]Provide --dom-file or --url[/red]")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Generate test automation artifacts from a DOM snippet with an LLM."""
    setup_logging(verbose)


@cli.command()
@click.option("--region", default="us-east-1", help="AWS region hosting the model")
@click.option("--model-id", default=None, help="Bedrock model identifier")
@click.option("--config", default=DEFAULT_CONFIG_PATH, help="Config file to write")
def init(region: str, model_id: Optional[str], config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config} already exists. Overwrite?"):
            return

    cfg = GeneratorConfig()
    cfg.bedrock.aws_region = region
    if model_id:
        cfg.model_id = model_id
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nAWS credentials are read from the standard AWS chain, or set")
    console.print('  [blue]"aws_secret_key": "env:AWS_SECRET_ACCESS_KEY"[/blue] in the bedrock section.')


@cli.command("types")
def list_types() -> None:
    """List the available generators."""
    registry = PromptRegistry.default()
    table = Table(title="Generators")
    table.add_column("Template Key", style="bold")
    table.add_column("Generator Type")
    table.add_column("Variables")
    for key in registry.keys():
        table.add_row(
            key.value,
            registry.generator_type(key),
            ", ".join(sorted(registry.placeholders(key))),
        )
    console.print(table)


@cli.command()
@click.argument("template_key")
@click.option("--dom-file", "-d", type=click.Path(exists=True, dir_okay=False), help="HTML snippet file")
@click.option("--action", "-a", default="", help="User action to automate")
@click.option("--url", "-u", default="", help="Page URL")
@click.option("--strict", is_flag=True, help="Fail when a template variable is not supplied")
def prompt(template_key: str, dom_file: Optional[str], action: str, url: str, strict: bool) -> None:
    """Print a filled prompt without calling the model."""
    registry = PromptRegistry.default()
    variables = {}
    if action:
        variables["userAction"] = action
    if url:
        variables["pageUrl"] = url
    if dom_file:
        variables["domContent"] = Path(dom_file).read_text(encoding="utf-8")
    try:
        text = registry.get_prompt(template_key, variables, strict=strict)
    except (TemplateNotFound, MissingTemplateVariables) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    click.echo(text)


@cli.command()
@click.argument("template_keys", nargs=-1, required=True)
@click.option("--dom-file", "-d", type=click.Path(exists=True, dir_okay=False), help="HTML snippet file")
@click.option("--url", "-u", default="", help="Page URL (captured with Playwright when no --dom-file)")
@click.option("--selector", "-s", default=None, help="Capture only this element")
@click.option("--action", "-a", default="", help="User action to automate")
@click.option("--output-dir", "-o", default=None, help="Where generated files go")
@click.option("--timeout", "-t", type=float, default=None, help="Per-request timeout in seconds")
@click.option("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config file path")
def generate(
    template_keys: tuple[str, ...],
    dom_file: Optional[str],
    url: str,
    selector: Optional[str],
    action: str,
    output_dir: Optional[str],
    timeout: Optional[float],
    config: str,
) -> None:
    """Generate artifacts for one or more TEMPLATE_KEYS ("all" for every one)."""
    cfg = _load_config(config)
    registry = PromptRegistry.default()
    keys = registry.keys() if "all" in template_keys else list(template_keys)

    dom_content = _read_dom(cfg, dom_file, url, selector)
    request = GenerationRequest(dom_content=dom_content, user_action=action, page_url=url)

    if cfg.debug_dir:
        set_debug_dir(Path(cfg.debug_dir))
    client = BedrockClient(
        cfg.bedrock,
        default_model_id=cfg.model_id,
        max_tokens=cfg.max_tokens,
        temperature=cfg.temperature,
    )
    generator = ArtifactGenerator(cfg, registry, client)

    try:
        if len(keys) == 1:
            artifacts = [generator.generate(keys[0], request, timeout=timeout)]
        else:
            artifacts = generator.generate_many(keys, request, timeout=timeout)
    except (TemplateNotFound, MissingTemplateVariables, EndpointInvocationError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    out = Path(output_dir or cfg.output_dir)
    files = [write_artifact(a, out) for a in artifacts]
    write_manifest(artifacts, files, out / "manifest.json")

    table = Table(title="Generated Artifacts")
    table.add_column("Generator", style="bold")
    table.add_column("Language")
    table.add_column("File")
    for artifact, path in zip(artifacts, files):
        table.add_row(artifact.generator_type, artifact.language or "-", f"[blue]{path}[/blue]")
    console.print(table)


@cli.command()
@click.argument("url")
@click.option("--selector", "-s", default=None, help="Capture only this element")
@click.option("--out", "-o", default="dom.html", help="Output file")
@click.option("--keep-scripts", is_flag=True, help="Keep script and style elements")
@click.option("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config file path")
def capture(url: str, selector: Optional[str], out: str, keep_scripts: bool, config: str) -> None:
    """Save a page's DOM for later use with --dom-file."""
    cfg = _load_config(config)
    try:
        html = asyncio.run(capture_dom(
            url,
            selector=selector,
            wait_until=cfg.capture_wait_until,
            timeout_ms=cfg.capture_timeout_ms,
            keep_scripts=keep_scripts,
        ))
    except DomCaptureError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    Path(out).write_text(html, encoding="utf-8")
    console.print(f"[green]Saved {len(html)} chars to {out}[/green]")


if __name__ == "__main__":
    cli()
