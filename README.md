# coltty

coltty changes your terminal's color scheme to match the directory you are in.
Put a `.coltty.toml` file in a project and the terminal switches colors when you
`cd` into it.

## Installation

```
pip install .
```

This installs the `coltty` command. Python 3.11 or later is required.

## Shell integration

Add the hook to your shell startup file:

```
# ~/.zshrc
eval "$(coltty init zsh)"

# ~/.bashrc
eval "$(coltty init bash)"
```

The zsh hook runs `coltty apply --quiet` on every directory change; the bash
hook runs it from `PROMPT_COMMAND` before every prompt. Other shells are
rejected with an error.

## Commands

```
coltty apply [--quiet] [--dry-run]   # apply the scheme for the current directory
coltty show                          # print the resolved scheme and where it came from
coltty schemes                       # list built-in and user-defined schemes
coltty set <scheme> [--inline]       # write .coltty.toml in the current directory
coltty set [--inline]                # interactive picker with live preview
coltty import <file> [--format F] [--name N] [--append]
coltty import --list-formats
coltty setup terminal-app            # create Terminal.app profiles for all schemes
```

`apply --dry-run` prints the resolved scheme instead of applying it.
`schemes` marks each entry as `(built-in)`, `(override)` for a user scheme that
replaces a built-in one, and `(default)` for the global default.

`set <scheme>` writes `scheme = "<name>"` to `./.coltty.toml` (warning if it
overwrites one) and applies the scheme right away. With `--inline` it writes the
scheme's foreground, background, cursor and palette under `[overrides]` instead
of a name.

### Interactive picker

`coltty set` without a scheme name opens a full-screen, two-pane picker. It
needs a TTY on standard input and a POSIX terminal (it uses `termios`). The
selected scheme is previewed live on the terminal.

- type to filter (prefix matches first, then substrings, then fuzzy matches)
- arrow keys Up/Down move the selection
- `Tab` switches between all themes and favorites only
- `f` toggles the selected theme as a favorite; favorites are saved to
  `~/.config/coltty/favorites.toml`
- `Enter` saves the selection to `./.coltty.toml`
- `Esc` clears the filter, or, with an empty filter, restores the original
  colors and exits

The list shows how many directories under your home directory already use each
scheme. When the current directory's config holds only overrides, the picker
starts on the available scheme closest to those colors.

## Configuration

A directory config names a scheme and may override single colors:

```toml
# .coltty.toml
scheme = "nord"

[overrides]
background = "#1e2030"
```

coltty looks for `.coltty.toml` in the current directory and each parent; the
nearest one wins. A config that cannot be parsed is reported and the global
default is used. With no config found it uses the global default as well.

The global config lives at `~/.config/coltty/config.toml`:

```toml
[default]
scheme = "calm"

[schemes.calm]
foreground = "#c0caf5"
background = "#1a1b26"
cursor = "#c0caf5"
palette = ["#15161e", "#f7768e", "#9ece6a", "#e0af68"]
```

A scheme (and `[overrides]`) may also set `bold`, `selection_foreground`,
`selection_background`, `tab`, `iterm_preset` and `terminal_app_profile`.

Built-in schemes: gruvbox, nord, dracula, solarized-dark, catppuccin, one-dark,
rose-pine and kanagawa. A user scheme with the same name replaces the built-in
one. Without any configuration, gruvbox is used.

## Importing themes

`coltty import` reads Gogh JSON (`.json`), base16 YAML (`.yaml`, `.yml`) and
iTerm2 presets (`.itermcolors`); the format comes from the extension unless
`--format` is given. The scheme name is taken from `--name`, else from the
theme's own name, else from the file name, lower-cased with spaces turned into
dashes. It prints a TOML snippet, or with `--append` writes the scheme straight
into the global config.

## Supported terminals

Ghostty, iTerm2, Terminal.app, Alacritty, kitty, WezTerm, Hyper, Tabby,
Konsole, xterm, foot, st, urxvt and VTE-based terminals, detected from
environment variables such as `TERM_PROGRAM` and `TERM`.

- Most terminals are changed with OSC 10/11/12/4 escape sequences.
- Ghostty additionally gets a config fragment at
  `~/.config/coltty/ghostty-colors` for new windows.
- iTerm2 additionally gets tab, bold, selection and preset settings.
- Terminal.app is driven through `osascript`, creating or updating a settings
  profile named after the scheme (or `terminal_app_profile`) and switching the
  front window to it.

Inside tmux the color sequences are passed through to the outer terminal. GNU
Screen does not support dynamic color changes; `apply` warns about it.

## Library use

The pieces are importable: `coltty.config` (loading configs, built-in schemes,
`resolve_scheme`), `coltty.resolver` (`resolve`, `find_dir_config`,
`scan_theme_usage`), `coltty.importers`, `coltty.schemes` and the terminal
adapters in `coltty.adapter`.