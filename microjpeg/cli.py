"""
MicroJPEG CLI
Compress, convert, remove backgrounds and enhance images from the terminal
"""

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .artifacts import fetch_to_file
from .async_client import AsyncMicroJpegClient
from .config import get_settings
from .exceptions import ApiError, ArgumentError
from .logging import setup_logging
from .models import (
    BackgroundRemovalOptions,
    CompressionInfo,
    CompressOptions,
    EnhanceOptions,
    EnhancementInfo,
    ResizeMode,
    ResultEnvelope,
    UsageInfo,
)
from .sources import RemoteUrl

app = typer.Typer(
    name="microjpeg",
    help="MicroJPEG image compression, conversion, background removal and enhancement",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)

state = {"api_key": None, "json": False}


class ScaleFactor(str, Enum):
    x2 = "2"
    x4 = "4"
    x8 = "8"


@app.callback()
def main(
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", envvar="MICROJPEG_API_KEY", help="MicroJPEG API key"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Print results as JSON")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
):
    """
    MicroJPEG CLI

    Examples:
      microjpeg compress photo.jpg -q 80 -o photo.min.jpg
      microjpeg convert photo.png -f webp -o photo.webp
      microjpeg enhance face.jpg --scale 4 --face-enhance -o face@4x.jpg
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, settings.json_logs)
    state["api_key"] = api_key
    state["json"] = json_output


@app.command()
def version():
    """Show the SDK version"""
    console.print(f"microjpeg {__version__}")


def _run(operation: Callable[[AsyncMicroJpegClient], Awaitable[Any]]) -> Any:
    """Run one client operation, turning SDK errors into a clean exit."""

    async def _go() -> Any:
        async with AsyncMicroJpegClient(api_key=state["api_key"]) as client:
            return await operation(client)

    try:
        return asyncio.run(_go())
    except ApiError as e:
        _print_api_error(e)
        raise typer.Exit(1)
    except ArgumentError as e:
        err_console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(2)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error: File not found: {e.filename}[/red]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        err_console.print(f"[red]Request failed: {e}[/red]")
        raise typer.Exit(1)


def _print_api_error(error: ApiError) -> None:
    err_console.print(f"[red]API error {error.status_code} ({error.error_code}): {error.error_message}[/red]")
    if error.is_unauthorized:
        err_console.print("[yellow]Check your API key (--api-key or MICROJPEG_API_KEY)[/yellow]")
    elif error.is_limit_reached:
        err_console.print("[yellow]Usage limit reached - run 'microjpeg usage' for details[/yellow]")
    elif error.is_file_too_large:
        err_console.print("[yellow]File exceeds your plan's upload limit[/yellow]")
    elif error.is_feature_restricted:
        err_console.print("[yellow]This feature is not available on your plan[/yellow]")


def _show_compression(envelope: ResultEnvelope[CompressionInfo], title: str) -> None:
    if state["json"]:
        console.print_json(json.dumps(envelope.model_dump(mode="json", by_alias=True)))
        return
    info = envelope.result
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Original size", f"{info.original_size:,} bytes")
    table.add_row("Compressed size", f"{info.compressed_size:,} bytes")
    table.add_row("Savings", f"{info.savings_percent:.1f}%")
    table.add_row("Processing time", f"{info.processing_time} ms")
    table.add_row("Compression count", str(envelope.compression_count))
    table.add_row("Download URL", info.download_url)
    console.print(table)


def _show_enhancement(envelope: ResultEnvelope[EnhancementInfo]) -> None:
    if state["json"]:
        console.print_json(json.dumps(envelope.model_dump(mode="json", by_alias=True)))
        return
    info = envelope.result
    table = Table(title="Enhancement", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row(
        "Original", f"{info.original_dimensions.width}x{info.original_dimensions.height}"
    )
    table.add_row("Enhanced", f"{info.new_dimensions.width}x{info.new_dimensions.height}")
    table.add_row("Processing time", f"{info.processing_time} ms")
    table.add_row("Compression count", str(envelope.compression_count))
    table.add_row("Download URL", info.download_url)
    console.print(table)


def _process(
    call: Callable[[AsyncMicroJpegClient], Awaitable[ResultEnvelope[Any]]],
    output_path: Optional[Path],
) -> ResultEnvelope[Any]:
    """Run a processing call and optionally save its artifact in the same session."""

    async def operation(client: AsyncMicroJpegClient) -> ResultEnvelope[Any]:
        envelope = await call(client)
        if output_path is not None:
            await client.download_to_file(envelope, output_path)
        return envelope

    envelope = _run(operation)
    if output_path is not None and not state["json"]:
        console.print(f"[green]Saved to {output_path}[/green]")
    return envelope


def _as_source(input_ref: str) -> Any:
    if input_ref.startswith(("http://", "https://")):
        return RemoteUrl(input_ref)
    return Path(input_ref)


@app.command()
def compress(
    input_ref: Annotated[str, typer.Argument(help="Image file path or http(s) URL")],
    quality: Annotated[
        Optional[int], typer.Option("-q", "--quality", min=1, max=100, help="Quality (1-100)")
    ] = None,
    format: Annotated[
        Optional[str], typer.Option("-f", "--format", help="Output format")
    ] = None,
    width: Annotated[Optional[int], typer.Option("--width", help="Resize width")] = None,
    height: Annotated[Optional[int], typer.Option("--height", help="Resize height")] = None,
    mode: Annotated[
        Optional[ResizeMode], typer.Option("--mode", help="Resize mode")
    ] = None,
    output_path: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Save the result here")
    ] = None,
):
    """Compress an image, optionally resizing it"""
    options = CompressOptions(
        quality=quality,
        output_format=format,
        resize_width=width,
        resize_height=height,
        resize_mode=mode,
    )
    source = _as_source(input_ref)
    envelope = _process(lambda client: client.compress(source, options), output_path)
    _show_compression(envelope, "Compression")


@app.command()
def convert(
    input_path: Annotated[Path, typer.Argument(help="Input image file path")],
    format: Annotated[
        str, typer.Option("-f", "--format", help="Output format (webp, avif, jpeg, png, ...)")
    ],
    quality: Annotated[
        Optional[int], typer.Option("-q", "--quality", min=1, max=100, help="Quality (1-100)")
    ] = None,
    output_path: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Save the result here")
    ] = None,
):
    """Convert an image to another format"""
    envelope = _process(
        lambda client: client.convert(input_path, format, quality), output_path
    )
    _show_compression(envelope, "Conversion")


@app.command(name="remove-bg")
def remove_bg(
    input_path: Annotated[Path, typer.Argument(help="Input image file path")],
    format: Annotated[
        Optional[str], typer.Option("-f", "--format", help="Output format")
    ] = None,
    quality: Annotated[
        Optional[int], typer.Option("-q", "--quality", min=1, max=100, help="Quality (1-100)")
    ] = None,
    output_path: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Save the result here")
    ] = None,
):
    """Remove the background of an image"""
    options = BackgroundRemovalOptions(output_format=format, quality=quality)
    envelope = _process(
        lambda client: client.remove_background(input_path, options), output_path
    )
    _show_compression(envelope, "Background removal")


@app.command()
def enhance(
    input_path: Annotated[Path, typer.Argument(help="Input image file path")],
    scale: Annotated[
        ScaleFactor, typer.Option("-s", "--scale", help="Upscale factor")
    ] = ScaleFactor.x2,
    face_enhance: Annotated[
        bool, typer.Option("--face-enhance", help="Restore faces while upscaling")
    ] = False,
    format: Annotated[
        Optional[str], typer.Option("-f", "--format", help="Output format")
    ] = None,
    quality: Annotated[
        Optional[int], typer.Option("-q", "--quality", min=1, max=100, help="Quality (1-100)")
    ] = None,
    output_path: Annotated[
        Optional[Path], typer.Option("-o", "--output", help="Save the result here")
    ] = None,
):
    """Upscale an image with AI enhancement"""
    options = EnhanceOptions(
        scale=int(scale.value),
        face_enhance=face_enhance,
        output_format=format,
        quality=quality,
    )
    envelope = _process(lambda client: client.enhance(input_path, options), output_path)
    _show_enhancement(envelope)


@app.command()
def usage():
    """Show account tier, usage and limits"""
    info: UsageInfo = _run(lambda client: client.get_usage())
    if state["json"]:
        console.print_json(json.dumps(info.model_dump(mode="json", by_alias=True)))
        return
    table = Table(title=f"Usage ({info.tier})")
    table.add_column("Operation", style="cyan")
    table.add_column("Used", justify="right")
    table.add_column("Limit", justify="right")
    table.add_row("Compressions", str(info.usage.compressions), str(info.limits.compression_limit))
    table.add_row(
        "Background removals",
        str(info.usage.background_removals),
        str(info.limits.background_removal_limit),
    )
    table.add_row("Enhancements", str(info.usage.enhancements), str(info.limits.enhancement_limit))
    console.print(table)


@app.command()
def download(
    url: Annotated[str, typer.Argument(help="Download URL from a previous result")],
    output_path: Annotated[Path, typer.Argument(help="Destination file")],
):
    """Download a processed image (no API key needed)"""

    async def _go() -> int:
        async with httpx.AsyncClient(timeout=get_settings().timeout) as http:
            return await fetch_to_file(http, url, output_path)

    try:
        written = asyncio.run(_go())
    except httpx.HTTPError as e:
        err_console.print(f"[red]Download failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Saved {written:,} bytes to {output_path}[/green]")


if __name__ == "__main__":
    app()
