"""Shell completion scripts for phantom.

Scripts are generated from the argparse parser so every subcommand and long
option stays listed. Worktree names are completed at runtime through
``phantom list --names``.
"""

import argparse
from dataclasses import dataclass
from typing import Dict, List, Tuple

SUPPORTED_SHELLS = ("fish", "zsh")

# Subcommands whose first positional argument is an existing worktree
WORKTREE_COMMANDS = ("where", "delete", "shell", "exec")

FISH_HEADER = """# Fish completion for phantom
# Place this in ~/.config/fish/completions/phantom.fish

function __phantom_list_worktrees
    phantom list --names 2>/dev/null
end

function __phantom_using_command
    set -l cmd (commandline -opc)
    if test (count $cmd) -eq 1
        # No subcommand yet
        test (count $argv) -eq 0
        return
    end
    test (count $argv) -gt 0; and test "$argv[1]" = "$cmd[2]"
end

# Disable file completion for phantom
complete -c phantom -f
"""

ZSH_HEADER = """#compdef phantom
# Place this as _phantom in a directory on your $fpath

_phantom_worktrees() {
    local -a worktrees
    worktrees=(${(f)"$(phantom list --names 2>/dev/null)"})
    _describe 'worktree' worktrees
}
"""


@dataclass
class Option:
    """A long option as seen by the completion scripts."""

    flag: str
    help_text: str
    takes_value: bool


def _long_options(parser: argparse.ArgumentParser) -> List[Option]:
    options = []
    for action in parser._actions:
        for flag in action.option_strings:
            if not flag.startswith("--") or flag == "--help":
                continue
            options.append(Option(flag[2:], action.help or "", action.nargs != 0))
    return options


def get_subcommands(parser: argparse.ArgumentParser) -> Dict[str, Tuple[str, argparse.ArgumentParser]]:
    """Subcommand name -> (help text, subparser), in definition order."""
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            helps = {choice.dest: choice.help or "" for choice in action._choices_actions}
            return {name: (helps.get(name, ""), sub) for name, sub in action.choices.items()}
    return {}


def _fish_quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")


def _zsh_escape(text: str) -> str:
    return (
        text.replace("'", "'\\''")
        .replace("[", "\\[")
        .replace("]", "\\]")
        .replace(":", "\\:")
    )


def generate_fish_completion(parser: argparse.ArgumentParser) -> str:
    lines = [FISH_HEADER, "# Main commands"]
    subcommands = get_subcommands(parser)
    for name, (help_text, _) in subcommands.items():
        lines.append(
            f'complete -c phantom -n "__phantom_using_command" -a "{name}" -d "{_fish_quote(help_text)}"'
        )

    lines.append("")
    lines.append("# Global options")
    for option in _long_options(parser):
        suffix = " -r" if option.takes_value else ""
        lines.append(f'complete -c phantom -l {option.flag} -d "{_fish_quote(option.help_text)}"{suffix}')

    for name, (_, subparser) in subcommands.items():
        options = _long_options(subparser)
        if not options and name not in WORKTREE_COMMANDS and name != "completion":
            continue
        lines.append("")
        lines.append(f"# {name} command")
        condition = f'-n "__phantom_using_command {name}"'
        for option in options:
            suffix = " -r" if option.takes_value else ""
            lines.append(
                f'complete -c phantom {condition} -l {option.flag} -d "{_fish_quote(option.help_text)}"{suffix}'
            )
        if name in WORKTREE_COMMANDS:
            lines.append(f'complete -c phantom {condition} -a "(__phantom_list_worktrees)"')
        if name == "completion":
            lines.append(f'complete -c phantom {condition} -a "{" ".join(SUPPORTED_SHELLS)}"')

    return "\n".join(lines) + "\n"


def _zsh_option_spec(option: Option) -> str:
    if option.takes_value:
        return f"'--{option.flag}=[{_zsh_escape(option.help_text)}]:value:'"
    return f"'--{option.flag}[{_zsh_escape(option.help_text)}]'"


def _zsh_positional_specs(name: str) -> List[str]:
    if name == "exec":
        return ["'1:worktree:_phantom_worktrees'", "'*::command:_normal'"]
    if name in WORKTREE_COMMANDS:
        return ["'1:worktree:_phantom_worktrees'"]
    if name in ("create", "attach"):
        return ["'1:name:'"]
    if name == "completion":
        return [f"'1:shell:({' '.join(SUPPORTED_SHELLS)})'"]
    return []


def generate_zsh_completion(parser: argparse.ArgumentParser) -> str:
    subcommands = get_subcommands(parser)
    lines = [ZSH_HEADER, "_phantom() {", "    local -a commands", "    commands=("]
    for name, (help_text, _) in subcommands.items():
        lines.append(f"        '{name}:{_zsh_escape(help_text)}'")
    lines.append("    )")
    lines.append("")
    lines.append("    _arguments -C \\")
    for option in _long_options(parser):
        lines.append(f"        {_zsh_option_spec(option)} \\")
    lines.append("        '1: :->command' \\")
    lines.append("        '*:: :->args'")
    lines.append("")
    lines.append("    case $state in")
    lines.append("        command)")
    lines.append("            _describe 'command' commands")
    lines.append("            ;;")
    lines.append("        args)")
    lines.append("            case $words[1] in")
    for name, (_, subparser) in subcommands.items():
        specs = [_zsh_option_spec(option) for option in _long_options(subparser)]
        specs.extend(_zsh_positional_specs(name))
        if not specs:
            continue
        lines.append(f"                {name})")
        lines.append("                    _arguments \\")
        for spec in specs[:-1]:
            lines.append(f"                        {spec} \\")
        lines.append(f"                        {specs[-1]}")
        lines.append("                    ;;")
    lines.append("            esac")
    lines.append("            ;;")
    lines.append("    esac")
    lines.append("}")
    lines.append("")
    lines.append('_phantom "$@"')
    return "\n".join(lines) + "\n"


def generate_completion(shell: str, parser: argparse.ArgumentParser) -> str:
    """Completion script for ``shell`` (one of SUPPORTED_SHELLS)."""
    if shell == "fish":
        return generate_fish_completion(parser)
    if shell == "zsh":
        return generate_zsh_completion(parser)
    raise ValueError(f"Unsupported shell: {shell}")
