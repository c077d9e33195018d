"""Main CLI application for promptvault."""

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, NoReturn, TypeVar

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from promptvault import __version__
from promptvault.cli.context import (
    create_cache,
    create_context,
    create_template_store,
)
from promptvault.cli.options import (
    MaxTokensOption,
    ModelOption,
    NoCacheOption,
    ProviderOption,
    TemperatureOption,
    VarOption,
    parse_variables,
)
from promptvault.config import PromptVaultConfig, load_config, resolve_cache_dir
from promptvault.config.defaults import get_config_path
from promptvault.exceptions import PromptVaultError, TemplateNotFoundError
from promptvault.utils.logging import setup_logging

T = TypeVar("T")

# Create Typer app
app = typer.Typer(
    name="promptvault",
    help="Prompt templates and cached LLM responses",
    add_completion=True,
    no_args_is_help=True,
)

# Rich console for output
console = Console()
err_console = Console(stderr=True)


def _fail(error: PromptVaultError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {error}", markup=True, highlight=False)
    raise typer.Exit(error.exit_code)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning promptvault errors into exit codes."""
    try:
        return asyncio.run(coro)
    except PromptVaultError as e:
        _fail(e)


def _config(ctx: typer.Context) -> PromptVaultConfig:
    return ctx.ensure_object(PromptVaultConfig)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"promptvault version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file. Defaults to $PROMPTVAULT_CONFIG or ~/.config/promptvault/config.toml.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level.",
    ),
) -> None:
    """Prompt templates and cached LLM responses."""
    try:
        config = load_config(config_file)
    except PromptVaultError as e:
        _fail(e)

    setup_logging(
        level=log_level or config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
    )
    ctx.obj = config


@app.command()
def ask(
    ctx: typer.Context,
    prompt: str | None = typer.Argument(
        None,
        help="Prompt text. With --template, fills the selectedCode variable.",
    ),
    template: str | None = typer.Option(
        None, "--template", "-T", help="Render this template and send the result."
    ),
    var: VarOption = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
    temperature: TemperatureOption = None,
    max_tokens: MaxTokensOption = None,
    no_cache: NoCacheOption = False,
) -> None:
    """Send a prompt, or a rendered template, to the LLM."""
    if template is None and not prompt:
        raise typer.BadParameter("Provide a prompt or --template.")
    variables = parse_variables(var)

    try:
        app_ctx = create_context(_config(ctx), provider=provider, no_cache=no_cache)
    except PromptVaultError as e:
        _fail(e)

    async def _ask() -> str:
        text = prompt or ""
        if template is not None:
            await app_ctx.templates.initialize()
            if prompt is not None:
                variables.setdefault("selectedCode", prompt)
            text = await app_ctx.templates.use_template(template, variables)
        return await app_ctx.service.generate_response(
            text,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        progress.add_task(description="Generating response...", total=None)
        response = _run(_ask())

    console.print(response, markup=False, highlight=False, soft_wrap=True)


@app.command()
def models(
    ctx: typer.Context,
    provider: ProviderOption = None,
) -> None:
    """List models the provider can serve."""
    try:
        app_ctx = create_context(_config(ctx), provider=provider)
    except PromptVaultError as e:
        _fail(e)

    names = _run(app_ctx.service.get_available_models())
    default = app_ctx.service.get_default_model()

    console.print(f"[bold]Models ({app_ctx.provider.provider_type.value})[/bold]\n")
    if not names:
        console.print("[dim]No models available[/dim]")
        return
    for name in names:
        marker = " [green](default)[/green]" if name == default else ""
        console.print(f"  {name}{marker}", highlight=False)


@app.command("config")
def config_cmd(
    ctx: typer.Context,
    show_path: bool = typer.Option(
        False,
        "--path",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    if show_path:
        console.print(str(get_config_path()), highlight=False, soft_wrap=True)
        return

    config = _config(ctx)
    console.print("[bold]promptvault configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}", highlight=False, soft_wrap=True)
    console.print(f"Default provider: {config.default_provider.value}")
    console.print(f"Cache enabled: {config.cache.enabled}")
    console.print(f"Cache TTL: {config.cache.ttl_minutes} minutes")
    console.print(
        f"Generation: temperature={config.generation.temperature} "
        f"max_tokens={config.generation.max_tokens}"
    )

    # Provider status
    console.print("\n[bold]Providers:[/bold]")
    console.print(
        f"  Ollama: {'enabled' if config.providers.ollama.enabled else 'disabled'}"
        f" ({config.providers.ollama.default_model})"
    )
    console.print(
        f"  OpenAI: {'enabled' if config.providers.openai.enabled else 'disabled'}"
        f" ({config.providers.openai.default_model})"
    )
    console.print(
        f"  Anthropic: {'enabled' if config.providers.anthropic.enabled else 'disabled'}"
        f" ({config.providers.anthropic.default_model})"
    )


# Cache subcommand group
cache_app = typer.Typer(help="Manage the response cache.")
app.add_typer(cache_app, name="cache")


@cache_app.command("stats")
def cache_stats(ctx: typer.Context) -> None:
    """Show cache statistics."""
    config = _config(ctx)
    cache = create_cache(config)

    entries = _run(cache.count())

    console.print("[bold]Cache Statistics[/bold]\n")
    console.print(f"Enabled: {cache.enabled}")
    console.print(f"TTL: {cache.ttl_minutes} minutes")
    console.print(f"Directory: {resolve_cache_dir(config)}", highlight=False, soft_wrap=True)
    console.print(f"Total entries: {entries}")


@cache_app.command("clear")
def cache_clear(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Delete every cached response."""
    cache = create_cache(_config(ctx))

    if not force and not typer.confirm("Clear all cache entries?"):
        console.print("[dim]Cancelled[/dim]")
        return

    cleared = _run(cache.clear_cache())
    console.print(f"Cleared {cleared} cache entries")


@cache_app.command("prune")
def cache_prune(ctx: typer.Context) -> None:
    """Delete expired and unreadable cached responses."""
    cache = create_cache(_config(ctx))
    removed = _run(cache.clear_expired_cache())
    console.print(f"Removed {removed} expired cache entries")


# Templates subcommand group
templates_app = typer.Typer(help="Manage prompt templates.")
app.add_typer(templates_app, name="templates")


@templates_app.command("list")
def templates_list(
    ctx: typer.Context,
    category: str | None = typer.Option(None, "--category", help="Only this category."),
    tag: list[str] | None = typer.Option(None, "--tag", help="Match any of these tags."),
    user_only: bool = typer.Option(False, "--user", help="Only user-defined templates."),
) -> None:
    """List templates."""
    store = create_template_store(_config(ctx))
    _run(store.initialize())

    if category:
        templates = store.get_templates_by_category(category)
    else:
        templates = store.get_all_templates()
    if tag:
        tagged = {t.id for t in store.get_templates_by_tags(tag)}
        templates = [t for t in templates if t.id in tagged]
    if user_only:
        templates = [t for t in templates if t.is_user_defined]

    if not templates:
        console.print("[dim]No templates found[/dim]")
        return

    table = Table(title="Templates")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Uses", justify="right")
    table.add_column("Source")
    for t in templates:
        table.add_row(
            t.id,
            t.name,
            t.category,
            str(t.usage),
            "user" if t.is_user_defined else "built-in",
        )
    console.print(table)


@templates_app.command("show")
def templates_show(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template id."),
) -> None:
    """Show one template."""
    store = create_template_store(_config(ctx))
    _run(store.initialize())

    template = store.get_template(template_id)
    if template is None:
        _fail(TemplateNotFoundError(f"Template with ID {template_id} not found"))

    console.print(f"[bold]{template.name}[/bold] ({template.id})", highlight=False)
    if template.description:
        console.print(template.description, markup=False, highlight=False)
    console.print(f"Category: {template.category}", markup=False, highlight=False)
    console.print(f"Tags: {', '.join(template.tags) or '-'}", markup=False, highlight=False)
    console.print(
        f"Variables: {', '.join(template.variables) or '-'}", markup=False, highlight=False
    )
    console.print(f"Uses: {template.usage}")
    console.print()
    console.print(template.template, markup=False, highlight=False, soft_wrap=True)


@templates_app.command("use")
def templates_use(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template id."),
    var: VarOption = None,
) -> None:
    """Render a template without calling the LLM."""
    variables = parse_variables(var)
    store = create_template_store(_config(ctx))

    async def _use() -> str:
        await store.initialize()
        return await store.use_template(template_id, variables)

    console.print(_run(_use()), markup=False, highlight=False, soft_wrap=True)


@templates_app.command("create")
def templates_create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Template name."),
    text: str = typer.Option(
        ..., "--template", "-t", help="Template text with {{variable}} placeholders."
    ),
    description: str = typer.Option("", "--description", "-d", help="Description."),
    category: str = typer.Option("General", "--category", help="Category."),
    tag: list[str] | None = typer.Option(None, "--tag", help="Tag. Repeat for several."),
) -> None:
    """Create a user-defined template."""
    store = create_template_store(_config(ctx))

    async def _create() -> str:
        await store.initialize()
        template = await store.create_template(
            name=name,
            template=text,
            description=description,
            category=category,
            tags=tag or [],
        )
        return template.id

    template_id = _run(_create())
    console.print(f"Created template {template_id}", highlight=False)


@templates_app.command("delete")
def templates_delete(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template id."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Delete a user-defined template."""
    store = create_template_store(_config(ctx))
    _run(store.initialize())

    if template_id not in store:
        _fail(TemplateNotFoundError(f"Template with ID {template_id} not found"))

    if not force and not typer.confirm(f"Delete template '{template_id}'?"):
        console.print("[dim]Cancelled[/dim]")
        return

    _run(store.delete_template(template_id))
    console.print(f"Deleted template {template_id}", highlight=False)


@templates_app.command("export")
def templates_export(
    ctx: typer.Context,
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout."
    ),
    user_only: bool = typer.Option(False, "--user", help="Only user-defined templates."),
) -> None:
    """Export templates as JSON."""
    store = create_template_store(_config(ctx))
    _run(store.initialize())

    data = store.export_templates(user_only=user_only)
    if output is None:
        typer.echo(data)
        return

    output.write_text(data + "\n", encoding="utf-8")
    console.print(f"Exported templates to {output}", highlight=False, soft_wrap=True)


@templates_app.command("import")
def templates_import(
    ctx: typer.Context,
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file."),
) -> None:
    """Import templates from a JSON file."""
    store = create_template_store(_config(ctx))
    json_data = source.read_text(encoding="utf-8")

    async def _import() -> int:
        await store.initialize()
        return len(await store.import_templates(json_data))

    count = _run(_import())
    console.print(f"Imported {count} templates")


@templates_app.command("reset-stats")
def templates_reset_stats(ctx: typer.Context) -> None:
    """Reset usage counters on every template."""
    store = create_template_store(_config(ctx))

    async def _reset() -> None:
        await store.initialize()
        await store.reset_usage_stats()

    _run(_reset())
    console.print("Usage statistics reset")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
