"""
L0 Data — Files written verbatim into the home directory.

``TMUX_CONF`` → ~/.tmux.conf, ``TMUX_HELPERS`` → ~/bin/tmux.sh,
``STARSHIP_TOML`` → ~/.config/starship.toml (unless a preset is set).
"""

from __future__ import annotations

TMUX_CONF = """\
set -g mouse on
setw -g mode-keys vi
bind-key -T copy-mode-vi v send -X begin-selection
bind-key -T copy-mode-vi y send -X copy-selection
bind-key -T copy-mode-vi y send -X copy-pipe-and-cancel "xclip -selection clipboard -in"
"""

TMUX_HELPERS = """\
#!/bin/bash

# Aliases for managing tmux sessions.
tmux_attach_session() {
  tmux attach-session -t "$1"
}
tmux_new_session() {
  if [[ -z "$1" ]]; then
    echo "❌ Please provide a session name."
    return 1
  fi
  local session_name="$1"
  if [[ -n "$TMUX" ]]; then
    tmux new-session -d -s "$session_name"
    tmux switch-client -t "$session_name"
  else
    tmux new-session -s "$session_name"
  fi
}
tmux_kill_session() {
  if [[ "$1" == "--all" ]]; then
    echo "⚠️  Killing all tmux sessions..."
    tmux list-sessions -F '#S' | while read -r s; do
      tmux kill-session -t "$s"
    done
    return
  fi
  if [[ -z "$1" && -n "$TMUX" ]]; then
    local current
    current=$(tmux display-message -p '#S')
    echo " Killing current tmux session: $current"
    tmux kill-session -t "$current"
    return
  fi
  if [[ -n "$1" ]]; then
    echo " Killing tmux session: $1"
    tmux kill-session -t "$1"
    return
  fi
  echo "❌ No session name provided and not inside a tmux session."
  return 1
}
ta() {
  if ! command -v tmux >/dev/null 2>&1; then
    echo "tmux is not installed. Please install tmux first."
    return 1
  fi
  local first
  first=$(tmux list-sessions -F '#S' 2>/dev/null | head -n 1)
  if [[ -n "$first" ]]; then
    echo "Attaching to tmux session: $first"
    tmux attach -t "$first"
  else
    echo "No tmux sessions found. Creating a new session 'term' in ~"
    tmux new-session -s term -c ~
  fi
}
alias tmux-n="tmux_new_session"
alias tmux-a="tmux_attach_session"
alias tmux-k="tmux_kill_session"
alias n="tmux_new_session"
alias a="tmux_attach_session"
alias k="tmux_kill_session"
"""

STARSHIP_TOML = """\
format = \"\"\"
$username $directory$git_branch$git_status$nodejs$python$time
$character
\"\"\"

[username]
show_always = true
style_user = "bold fg:green"
format = "[$user]($style)"

[directory]
style = "bold fg:blue"
truncation_length = 3
truncate_to_repo = false
format = " in [$path]($style) "

[git_branch]
symbol = "🌿 "
style = "bold fg:purple"
format = "on [$symbol$branch]($style) "

[git_status]
style = "fg:yellow"
format = "[$all_status]($style)"

[nodejs]
symbol = "⬢ "
style = "fg:green"
format = "via [$symbol$version]($style) "

[python]
symbol = "🐍 "
style = "fg:cyan"
format = "via [$symbol$version]($style) "

[time]
disabled = false
time_format = "%H:%M"
style = "fg:yellow"
format = " [$time]($style)"

[character]
success_symbol = "[❯](bold fg:green) "
error_symbol = "[✗](bold fg:red) "
"""
