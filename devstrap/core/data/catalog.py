"""
L0 Data — Package lists, repositories and fixed download URLs.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# ── Package baseline ────────────────────────────────────────────

APT_PACKAGES: list[str] = [
    "curl", "wget", "git", "unzip",
    "ripgrep", "shellcheck", "zsh", "tmux", "xclip",
    "gcc", "make", "build-essential",
    "pipx", "fontconfig",
]

BREW_PACKAGES: list[str] = [
    "curl", "wget", "git", "unzip",
    "ripgrep", "shellcheck", "zsh", "tmux",
    "node", "pipx",
]

PIPX_PACKAGES: list[str] = ["pynvim", "pylint"]

NPM_PACKAGES: list[str] = ["pyright", "bash-language-server", "tree-sitter-cli"]

NODESOURCE_SETUP_URL = "https://deb.nodesource.com/setup_20.x"
HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

# ── Editor ──────────────────────────────────────────────────────

# Release asset names use raw ``uname -m`` style.
NEOVIM_ARCH: dict[str, str] = {"x86_64": "x86_64", "arm64": "arm64"}
NEOVIM_URL = "https://github.com/neovim/neovim/releases/download/stable/nvim-linux-{arch}.tar.gz"

LAZY_NVIM_REPO = "folke/lazy.nvim"
LAZY_NVIM_REF = "stable"

NVIM_CONFIG_REPO = "kjtakke/neovim"
NVIM_CONFIG_REF = "master"
# repository path → path under ~/.config/nvim
NVIM_CONFIG_FILES: dict[str, str] = {
    "init.lua": "init.lua",
    "search/nsearch.txt": "nsearch.txt",
    "lazy-lock.json": "lazy-lock.json",
    "lua/cmp.lua.bak": "lua/cmp.lua.bak",
    "lua/init.lua": "lua/init.lua",
    "lua/lsp.lua": "lua/lsp.lua",
    "lua/plugins/init.lua": "lua/plugins/init.lua",
}

COPILOT_REPO = "github/copilot.vim"
COPILOT_REF = "release"

# ── Shell & prompt ──────────────────────────────────────────────

OH_MY_ZSH_INSTALL_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
STARSHIP_INSTALL_URL = "https://starship.rs/install.sh"

# plugin directory name → (repository, ref)
ZSH_PLUGINS: dict[str, tuple[str, str]] = {
    "zsh-autosuggestions": ("zsh-users/zsh-autosuggestions", "master"),
    "zsh-syntax-highlighting": ("zsh-users/zsh-syntax-highlighting", "master"),
    "fast-syntax-highlighting": ("zdharma-continuum/fast-syntax-highlighting", "master"),
    "zsh-autocomplete": ("marlonrichert/zsh-autocomplete", "main"),
}

ZSH_THEME = "agnoster"
ZSH_PLUGIN_LIST: list[str] = [
    "git", "zsh-autosuggestions", "fast-syntax-highlighting", "zsh-syntax-highlighting",
]

# ── Fonts ───────────────────────────────────────────────────────

NERD_FONT_URL = "https://github.com/ryanoasis/nerd-fonts/releases/download/v3.3.0/DroidSansMono.zip"
FONT_PATTERNS: list[str] = ["*.ttf"]

# ── Helper scripts ──────────────────────────────────────────────

GIT_HELPER_URL = "https://raw.githubusercontent.com/kjtakke/git-helper-scripts/main/git-helper.sh"
HELPER_SCRIPTS: list[str] = ["git-helper.sh", "tmux.sh"]
