"""
devstrap — CLI entrypoint.

Usage:
    devstrap
    python -m devstrap.main
"""

from __future__ import annotations

import os
import sys

import click

from devstrap import __version__
from devstrap.core.engine.executor import PhaseResult
from devstrap.core.observability.logging_config import setup_logging_from_env
from devstrap.core.use_cases.provision import run_provision

_STATUS_STYLE = {
    "ok": ("✅", "green"),
    "partial": ("⚠️ ", "yellow"),
    "skipped": ("⏭️ ", "yellow"),
    "failed": ("❌", "red"),
}


def _print_phase(result: PhaseResult) -> None:
    icon, color = _STATUS_STYLE.get(result.status, ("•", "white"))
    click.secho(f"{icon} {result.title}", fg=color, bold=result.status == "failed")
    if result.skip_reason:
        click.echo(f"   skipped: {result.skip_reason}")
    elif result.error:
        click.echo(f"   {result.error}")
    else:
        detail = f"   {result.changed} applied, {result.skipped} already present"
        if result.failed:
            detail += f", {result.failed} failed (non-fatal)"
        click.echo(detail)


@click.command()
def cli() -> None:
    """Provision this machine with the developer environment.

    Installs Neovim, Zsh with Oh-My-Zsh, Starship, a Nerd Font, tmux
    configuration and helper scripts. Safe to run again at any time.
    """
    environ = dict(os.environ)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging_from_env(environ)

    def _configure(ctx) -> None:
        if ctx.settings.log_level or ctx.settings.log_file:
            setup_logging_from_env(
                environ,
                default_level=ctx.settings.log_level,
                default_file=ctx.settings.log_file,
            )
        click.secho(
            f"\n🔧 devstrap {__version__} — {ctx.platform.value} ({ctx.machine})\n",
            fg="cyan",
            bold=True,
        )

    result = run_provision(environ, on_context=_configure, on_phase=_print_phase)

    if result.error:
        click.secho(f"\n❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    click.secho(
        "\n✅ Installation complete! Restart your terminal or source your shell "
        "configuration files to apply the changes.",
        fg="green",
        bold=True,
    )


if __name__ == "__main__":
    cli()
