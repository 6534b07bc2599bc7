"""
Shell & prompt setup — Oh-My-Zsh, Starship, zsh plugins, rc lines.

The installers and plugins are optional enhancements and tolerate
failure; the rc-file lines are not. ``ZSH_THEME=`` and ``plugins=``
are replaced rather than appended so there is only ever one of each.
"""

from __future__ import annotations

from devstrap.core.context import RunContext
from devstrap.core.data import catalog
from devstrap.core.data.bundled import STARSHIP_TOML
from devstrap.core.engine.executor import Phase
from devstrap.core.models.action import Action
from devstrap.core.models.probe import Probe
from devstrap.core.models.resource import RepoResource
from devstrap.core.phases._steps import (
    ensure_line,
    fetch_repo,
    mkdir,
    replace_line,
    set_aside,
    shell,
    write_file,
)

NAME = "shell"
TITLE = "Shell & prompt setup"

ZSH_EXPORT = 'export ZSH="$HOME/.oh-my-zsh"'
ZSH_THEME_LINE = f'ZSH_THEME="{catalog.ZSH_THEME}"'
PLUGINS_LINE = f"plugins=({' '.join(catalog.ZSH_PLUGIN_LIST)})"
STARSHIP_ZSH = 'eval "$(starship init zsh)"'
STARSHIP_BASH = 'eval "$(starship init bash)"'

# Present only once the installer has cloned the framework.
OMZ_MARKER = "oh-my-zsh.sh"


def autocomplete_line(ctx: RunContext) -> str:
    script = ctx.plugin_root / "plugins" / "zsh-autocomplete" / "zsh-autocomplete.plugin.zsh"
    return f"source {script}"


def _oh_my_zsh(ctx: RunContext) -> list[Action]:
    omz_dir = ctx.home / ".oh-my-zsh"
    has_zsh = Probe.command("zsh")
    # The installer refuses to run over an existing $ZSH; a directory
    # without the marker is moved aside first.
    clear = set_aside(f"{NAME}.oh-my-zsh-incomplete", omz_dir, OMZ_MARKER, requires=has_zsh)
    install = shell(
        f"{NAME}.oh-my-zsh",
        "Oh-My-Zsh",
        ["sh"],
        # Keep the existing .zshrc; lines are managed below.
        env={"RUNZSH": "no", "CHSH": "no", "KEEP_ZSHRC": "yes"},
        script_url=catalog.OH_MY_ZSH_INSTALL_URL,
        skip_if=Probe.file(str(omz_dir / OMZ_MARKER)),
        requires=has_zsh,
        tolerant=True,
    )
    return [clear, install]


def _starship(ctx: RunContext) -> list[Action]:
    installed = Probe.command("starship")
    if not ctx.is_linux:
        return [
            shell(
                f"{NAME}.starship",
                "brew install starship",
                ["brew", "install", "starship"],
                skip_if=installed,
                tolerant=True,
            )
        ]

    args = ["-y"]
    steps = []
    if not ctx.is_root:
        bin_dir = ctx.home / ".local" / "bin"
        args += ["-b", str(bin_dir)]
        steps.append(mkdir(f"{NAME}.local-bin", bin_dir))
    steps.append(
        shell(
            f"{NAME}.starship",
            "Starship",
            ["sh"],
            script_url=catalog.STARSHIP_INSTALL_URL,
            script_args=args,
            skip_if=installed,
            tolerant=True,
        )
    )
    return steps


def _prompt_config(ctx: RunContext) -> Action:
    target = ctx.home / ".config" / "starship.toml"
    preset = ctx.settings.starship_preset
    if not preset:
        return write_file(f"{NAME}.starship-toml", target, STARSHIP_TOML)
    return shell(
        f"{NAME}.starship-toml",
        f"starship preset {preset}",
        ["starship", "preset", preset, "-o", str(target)],
        requires=Probe.command("starship"),
        tolerant=True,
    )


def build(ctx: RunContext) -> Phase:
    plugins_dir = ctx.plugin_root / "plugins"

    steps = [*_oh_my_zsh(ctx), *_starship(ctx), mkdir(f"{NAME}.plugins-dir", plugins_dir)]
    for plugin, (repo, ref) in catalog.ZSH_PLUGINS.items():
        steps.append(
            fetch_repo(
                f"{NAME}.plugin.{plugin}",
                plugin,
                RepoResource(repo=repo, ref=ref, destination=str(plugins_dir / plugin)),
                ctx,
                tolerant=True,
            )
        )

    zshrc = ctx.zshrc
    steps += [
        ensure_line(f"{NAME}.zsh-export", zshrc, ZSH_EXPORT),
        replace_line(f"{NAME}.zsh-theme", zshrc, "ZSH_THEME=", ZSH_THEME_LINE),
        replace_line(f"{NAME}.zsh-plugins", zshrc, "plugins=", PLUGINS_LINE),
        ensure_line(f"{NAME}.starship-zsh", zshrc, STARSHIP_ZSH),
        ensure_line(f"{NAME}.autocomplete", zshrc, autocomplete_line(ctx)),
        ensure_line(f"{NAME}.starship-bash", ctx.bashrc, STARSHIP_BASH),
        mkdir(f"{NAME}.config-dir", ctx.home / ".config"),
        _prompt_config(ctx),
    ]
    return Phase(NAME, TITLE, steps)
