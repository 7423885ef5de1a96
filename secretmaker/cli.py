"""CLI for SecretMaker: generate secrets and analyze batches of them for bias."""

import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import load_config
from .exceptions import SecretMakerError
from .generator import SecretAssembler, generate_batch
from .log import setup_logging
from .stats import analyze_secrets

logger = logging.getLogger(__name__)

# secrets may contain text like ":a:" that rich would turn into emoji
console = Console(emoji=False)

INTRO = (
    "Generates a batch of secrets and tabulates where each character lands. "
    "Large spreads in usage or position point at a weakness in the generator."
)

def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n

def cmd_generate(args) -> None:
    assembler = SecretAssembler(args.length)
    for i in range(args.count):
        secret = assembler.get_new_secret()
        console.print(f"[bold green]Secret #{i+1}:[/bold green] {escape(secret)}", soft_wrap=True, highlight=False)

def cmd_analyze(args) -> None:
    logger.info("analyzing %d secrets of length %d", args.count, args.length)
    batch = generate_batch(args.count, args.length)
    result = analyze_secrets(batch)

    console.print(Panel(escape(result["last_secret"]), title=f"Last of {result['count']} secrets ({result['length']} chars)"))

    summary = Table(show_header=True, header_style="bold cyan", title="Distribution")
    summary.add_column("Measure")
    summary.add_column("Value", justify="right")
    summary.add_row("Mean uses per character", f"{result['usage_mean']:.2f}")
    summary.add_row("Std dev of character usage", f"{result['usage_stdev']:.2f}")
    summary.add_row("Mean positional std dev", f"{result['positional_stdev_mean']:.2f}")
    summary.add_row(
        "Worst positional std dev",
        f"{result['positional_stdev_max']:.2f} ({escape(result['worst_position_char'])})",
    )
    summary.add_row("Chi-squared (usage vs uniform)", f"{result['chi_squared']:.2f} (df={result['df']})")
    summary.add_row("p-value", f"{result['p_value']:.4f}")
    summary.add_row("Entropy per secret", f"{result['entropy_bits']:.1f} bits")
    console.print(summary)

    shares = Table(show_header=True, header_style="bold magenta", title="Sub-pool share")
    shares.add_column("Pool")
    shares.add_column("Observed", justify="right")
    shares.add_column("Expected", justify="right")
    for name, share in result["pool_shares"].items():
        shares.add_row(name, f"{share['observed']:.4f}", f"{share['expected']:.4f}")
    console.print(shares)

    if result["p_value"] < 0.001:
        console.print("[yellow]Character usage deviates from uniform (p < 0.001).[/yellow]")

def build_parser(cfg: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="secretmaker", description="Cryptographic strength secret generator")
    parser.add_argument("--log-level", default=cfg["log_level"], help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more secrets")
    gen.add_argument("--length", type=int, default=cfg["default_length"], help="Secret length (4-65535)")
    gen.add_argument("--count", type=_positive_int, default=1, help="How many secrets to generate")
    gen.set_defaults(func=cmd_generate)

    an = sub.add_parser("analyze", help="Generate a batch and show distribution statistics", description=INTRO)
    an.add_argument("--count", type=_positive_int, default=cfg["default_count"], help="Number of secrets to generate")
    an.add_argument("--length", type=int, default=cfg["default_length"], help="Secret length (4-65535)")
    an.set_defaults(func=cmd_analyze)

    return parser

def main(argv: Optional[List[str]] = None) -> int:
    cfg = load_config()
    args = build_parser(cfg).parse_args(argv)
    setup_logging(args.log_level)
    try:
        args.func(args)
    except SecretMakerError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 2
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
