"""SynergyBridge CLI - Command Line Interface."""

import asyncio
import json
import logging
import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from synergy_bridge import __version__
from synergy_bridge.bridge import SynergyBridge, UnknownToolError
from synergy_bridge.identity import ARCHITECTURE_DIAGRAM, SERVER_NAME, SERVER_VERSION, TAGLINE, server_info
from synergy_bridge.utils.config import DEFAULT_CONFIG_FILE, Config
from synergy_bridge.utils.log_setup import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="synergy-bridge",
    help="SynergyBridge - enterprise integration with authentic enterprise latency",
    add_completion=False,
)

console = Console()

CONFIG_TEMPLATE = '''# SynergyBridge Configuration
delays:
  # 1.0 waits the full enterprise-grade delay, 0 skips it entirely
  time_scale: 1.0

errors:
  # Chance that any invocation fails with an authentic enterprise error
  probability: 0.10

responses:
  # Directory with replacement canned payloads (leave empty for the defaults)
  canned_dir: ""

logging:
  level: "WARNING"  # DEBUG, INFO, WARNING, ERROR
  file: ""
'''


def parse_param(raw: str) -> Dict[str, Any]:
    """Parse a ``key=value`` option into a one-entry mapping.

    Values are passed through as raw strings; handlers coerce their own
    typed parameters. An empty value reads as unset.
    """
    if "=" not in raw:
        raise typer.BadParameter(f"Expected key=value, got {raw!r}")
    key, value = raw.split("=", 1)
    key = key.strip()
    if not key:
        raise typer.BadParameter(f"Missing parameter name in {raw!r}")
    return {key: value or None}


def _load_config(config: Optional[str]) -> Dict[str, Any]:
    if config is None:
        if not Path(DEFAULT_CONFIG_FILE).exists():
            return {}
        config = DEFAULT_CONFIG_FILE
    return Config(config).load()


def _build_bridge(
    config: Optional[str],
    time_scale: Optional[float],
    error_probability: Optional[float],
    verbose: bool,
) -> SynergyBridge:
    app_config = _load_config(config)

    logging_config = app_config.get("logging") or {}
    level = "INFO" if verbose else logging_config.get("level", "WARNING")
    configure_logging(level, logging_config.get("file") or None)

    if time_scale is not None:
        app_config.setdefault("delays", {})["time_scale"] = time_scale
    if error_probability is not None:
        app_config.setdefault("errors", {})["probability"] = error_probability
    return SynergyBridge.from_config(app_config)


def _fail(message: str, error: Exception) -> None:
    console.print(f"[bold red]❌ {message}:[/bold red] {escape(str(error))}")
    raise typer.Exit(code=1) from error


async def _invoke_with_timeout(
    bridge: SynergyBridge, tool: str, params: Dict[str, Any], timeout: Optional[float]
) -> str:
    task = asyncio.ensure_future(bridge.invoke(tool, params))
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if not done:
        logger.warning("[%s] exceeded %ss client timeout, cancelling", tool, timeout)
        task.cancel()
    return await task


def classify_result(result: str) -> str:
    """Bucket a result text for burst summaries."""
    if result.startswith("ERR_"):
        return "injected error"
    if result.startswith("ERROR:"):
        if "INDETERMINATE" in result:
            return "interrupted"
        return "rejected"
    return "completed"


CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to configuration file")
PARAM_OPTION = typer.Option(None, "--param", "-p", help="Operation parameter as key=value (repeatable)")
TIME_SCALE_OPTION = typer.Option(
    None, "--time-scale", help="Multiply every delay by this factor (0 skips delays)", min=0.0
)
ERROR_PROBABILITY_OPTION = typer.Option(
    None, "--error-probability", help="Override the injected error probability (0-1)", min=0.0, max=1.0
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log invocations to stderr")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold blue]{SERVER_NAME}[/bold blue] v{SERVER_VERSION} (package {__version__})")


@app.command()
def init():
    """Initialize a new synergy-bridge.yaml configuration file."""
    with open(DEFAULT_CONFIG_FILE, "w", encoding="utf-8") as f:
        f.write(CONFIG_TEMPLATE)

    console.print(f"[green]✓[/green] Created {DEFAULT_CONFIG_FILE}")
    console.print("Edit the file to tune delays, error injection and logging.")


@app.command()
def info():
    """Show server metadata as JSON."""
    console.print_json(json.dumps(server_info()))


@app.command()
def diagram():
    """Show the enterprise architecture diagram."""
    console.print(Panel(ARCHITECTURE_DIAGRAM.rstrip("\n"), title=SERVER_NAME, subtitle=TAGLINE, border_style="blue"))


@app.command()
def tools():
    """List the available enterprise operations."""
    bridge = SynergyBridge()
    table = Table(title="Enterprise Tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Delay", style="magenta", justify="right")
    table.add_column("Required", style="green")
    table.add_column("Description", style="white")

    for entry in bridge.list_tools():
        table.add_row(
            entry["name"],
            f"{entry['delay_seconds']}s",
            ", ".join(entry["required"]),
            entry["description"],
        )
    console.print(table)


@app.command()
def errors(
    config: Optional[str] = CONFIG_OPTION,
    error_probability: Optional[float] = ERROR_PROBABILITY_OPTION,
):
    """List the enterprise error catalog and the active injection rate."""
    try:
        bridge = _build_bridge(config, None, error_probability, False)
    except (FileNotFoundError, ValueError) as e:
        _fail("Configuration error", e)

    table = Table(title="Enterprise Error Catalog")
    table.add_column("Code", style="red")
    table.add_column("Message", style="white")
    for error in bridge.catalog.all_errors:
        table.add_row(error.code, error.message)
    console.print(table)
    console.print(f"Injection probability: {bridge.catalog.error_probability:.1%}")


@app.command()
def invoke(
    tool: str = typer.Argument(..., help="Operation name, e.g. mainframe-jcl-submit"),
    param: Optional[List[str]] = PARAM_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    time_scale: Optional[float] = TIME_SCALE_OPTION,
    error_probability: Optional[float] = ERROR_PROBABILITY_OPTION,
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Cancel the call after this many seconds", min=0.0
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Invoke one enterprise operation and print its result."""
    params: Dict[str, Any] = {}
    for raw in param or []:
        params.update(parse_param(raw))

    try:
        bridge = _build_bridge(config, time_scale, error_probability, verbose)
        bridge.get_tool(tool)
    except UnknownToolError as e:
        console.print("Run 'synergy-bridge tools' to see what is available.")
        _fail("Lookup failed", e)
    except (FileNotFoundError, ValueError) as e:
        _fail("Configuration error", e)

    result = asyncio.run(_invoke_with_timeout(bridge, tool, params, timeout))
    console.print(result, markup=False, highlight=False, soft_wrap=True)


@app.command()
def burst(
    tool: str = typer.Argument(..., help="Operation name"),
    count: int = typer.Option(10, "--count", "-n", help="Number of concurrent invocations", min=1),
    param: Optional[List[str]] = PARAM_OPTION,
    config: Optional[str] = CONFIG_OPTION,
    time_scale: Optional[float] = TIME_SCALE_OPTION,
    error_probability: Optional[float] = ERROR_PROBABILITY_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Fire many concurrent invocations and summarize the outcomes."""
    params: Dict[str, Any] = {}
    for raw in param or []:
        params.update(parse_param(raw))

    try:
        bridge = _build_bridge(config, time_scale, error_probability, verbose)
        bridge.get_tool(tool)
    except UnknownToolError as e:
        _fail("Lookup failed", e)
    except (FileNotFoundError, ValueError) as e:
        _fail("Configuration error", e)

    console.print(f"[bold cyan]🚀 Sending {count} concurrent calls to {tool}...[/bold cyan]")
    start = time.perf_counter()
    results = asyncio.run(bridge.invoke_many([(tool, params)] * count))
    elapsed = time.perf_counter() - start

    outcomes = Counter(classify_result(result) for result in results)
    table = Table(title=f"Burst Summary: {tool}")
    table.add_column("Outcome", style="cyan")
    table.add_column("Count", style="magenta", justify="right")
    for outcome in ("completed", "injected error", "rejected", "interrupted"):
        table.add_row(outcome, str(outcomes.get(outcome, 0)))
    console.print(table)
    console.print(f"   Elapsed: {elapsed:.2f}s for {count} calls")


if __name__ == "__main__":
    app()
