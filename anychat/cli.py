"""
Command-line interface for anychat.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click

from anychat import __version__
from anychat.capabilities import AIClient, Capability
from anychat.client import AnyChat, provider_class
from anychat.config import load_config_file, settings
from anychat.exceptions import AnyChatError
from anychat.logging import configure_logging, get_logger
from anychat.types import ChatMessage, EmbeddingOptions, ImageGenerationOptions


logger = get_logger(__name__)

VERSION = __version__

T = TypeVar("T")


def client_options(f):
    """Options shared by every command that talks to a provider."""
    f = click.option(
        "--log-level",
        type=click.Choice(
            ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
        ),
        help="Log level; defaults to ANYCHAT_LOG_LEVEL",
    )(f)
    f = click.option("--config", "config_path", help="YAML or JSON config file")(f)
    f = click.option("--base-url", help="API base URL (DeepSeek only)")(f)
    f = click.option("--model", help="Model name; defaults per provider")(f)
    f = click.option("--api-key", help="Provider API key")(f)
    f = click.option("--provider", help="openai, gemini, claude or deepseek")(f)
    return f


def read_config(config_path: str | None) -> dict[str, Any]:
    return load_config_file(config_path) if config_path else {}


def build_client(
    provider: str | None,
    api_key: str | None,
    model: str | None,
    base_url: str | None,
    config_path: str | None,
) -> AIClient:
    """Create a client from file config, command-line options and settings."""
    file_config: dict[str, Any] = read_config(config_path)
    overrides = {
        "provider": provider or file_config.get("provider"),
        "api_key": api_key or file_config.get("api_key"),
        "model": model or file_config.get("model"),
        "base_url": base_url or file_config.get("base_url"),
    }
    try:
        return AnyChat.create_client(settings.client_config(**overrides))
    except (AnyChatError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def run_with_client(
    client: AIClient, operation: Callable[[AIClient], Awaitable[T]]
) -> T:
    async def runner() -> T:
        async with client:
            return await operation(client)

    try:
        return asyncio.run(runner())
    except AnyChatError as e:
        logger.error("Request failed", error=str(e))
        raise click.ClickException(str(e)) from e


@click.group()
def cli():
    """Command-line interface for anychat."""
    pass


@cli.command()
def version():
    """Show the version of anychat."""
    click.echo(f"anychat version {VERSION}")


@cli.command()
@click.argument("prompt")
@click.option("--system", help="System prompt to send before the user message")
@client_options
def chat(prompt: str, system: str | None, **options):
    """Send a single prompt and print the reply."""
    configure_logging(options.pop("log_level"))
    client = build_client(**options)

    messages = []
    if system:
        messages.append(ChatMessage(role="system", content=system))
    messages.append(ChatMessage(role="user", content=prompt))

    response = run_with_client(client, lambda c: c.chat(messages))
    click.echo(response.content)


@cli.command()
@click.argument("texts", nargs=-1, required=True)
@click.option("--embedding-model", help="Embedding model; defaults per provider")
@client_options
def embed(texts: tuple[str, ...], embedding_model: str | None, **options):
    """Print embeddings for one or more texts as JSON."""
    configure_logging(options.pop("log_level"))
    client = build_client(**options)

    embedding_input: str | list[str] = texts[0] if len(texts) == 1 else list(texts)
    request = EmbeddingOptions(input=embedding_input, model=embedding_model)
    response = run_with_client(client, lambda c: c.create_embeddings(request))
    click.echo(json.dumps(response.model_dump(mode="json")))


@cli.command()
@click.argument("prompt")
@click.option("--n", type=int, help="Number of images")
@click.option("--size", help="Image size, e.g. 1024x1024")
@click.option("--quality", help="standard or hd")
@click.option("--style", help="natural or vivid")
@client_options
def image(
    prompt: str,
    n: int | None,
    size: str | None,
    quality: str | None,
    style: str | None,
    **options,
):
    """Generate images and print their URLs, one per line."""
    configure_logging(options.pop("log_level"))
    client = build_client(**options)

    request = ImageGenerationOptions(
        prompt=prompt, n=n, size=size, quality=quality, style=style
    )
    response = run_with_client(client, lambda c: c.generate_image(request))
    for url in response.urls:
        click.echo(url)


@cli.command()
@client_options
def capabilities(**options):
    """List the optional capabilities of the selected provider."""
    configure_logging(options.pop("log_level"))
    file_config = read_config(options["config_path"])
    provider = options["provider"] or file_config.get("provider") or settings.provider
    try:
        adapter = provider_class(provider)
    except AnyChatError as e:
        raise click.ClickException(str(e)) from e

    for capability in Capability:
        mark = "yes" if adapter.supports(capability) else "no"
        click.echo(f"{capability.value}: {mark}")


if __name__ == "__main__":
    cli()
