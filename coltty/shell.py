"""Shell hook snippets that re-apply colors on directory change."""

from __future__ import annotations

_APPLY_COMMAND = "coltty apply --quiet 2>/dev/null"
_INDENT = " " * 4


def _function(name: str) -> list[str]:
    return [f"{name}() {{", f"{_INDENT}{_APPLY_COMMAND}", "}"]


def _zsh_hook() -> str:
    name = "coltty_chpwd"
    lines = [*_function(name), f"chpwd_functions+=({name})"]
    return "\n".join(lines) + "\n"


def _bash_hook() -> str:
    name = "__coltty_prompt_command"
    variable = "PROMPT_COMMAND"
    lines = [
        *_function(name),
        f'if [[ ! "${variable}" =~ {name} ]]; then',
        f'{_INDENT}{variable}="{name};${{{variable}}}"',
        "fi",
    ]
    return "\n".join(lines) + "\n"


_HOOKS = {"zsh": _zsh_hook, "bash": _bash_hook}


def shell_hook(shell: str) -> str:
    """Return the hook code for the given shell."""
    builder = _HOOKS.get(shell)
    if builder is None:
        known = ", ".join(_HOOKS)
        raise ValueError(f"unsupported shell: {shell} (supported: {known})")
    return builder()