"""
Handles the 'hook' command: print shell integration.

    eval "$(dotsync hook zsh)"     # ~/.zshrc
    eval "$(dotsync hook bash)"    # ~/.bashrc
"""

import os

import click

ZSH_HOOK = """\
_dotsync_precmd() {
  command dotsync check
}
autoload -U add-zsh-hook
add-zsh-hook precmd _dotsync_precmd
sync-clear-failures() {
  command dotsync clear-failures
}
"""

BASH_HOOK = """\
_dotsync_precmd() {
  command dotsync check
}
case ";${PROMPT_COMMAND};" in
  *";_dotsync_precmd;"*) ;;
  *) PROMPT_COMMAND="_dotsync_precmd${PROMPT_COMMAND:+;$PROMPT_COMMAND}" ;;
esac
sync-clear-failures() {
  command dotsync clear-failures
}
"""

HOOKS = {
    'zsh': ZSH_HOOK,
    'bash': BASH_HOOK,
}


def detect_shell() -> str:
    name = os.path.basename(os.environ.get('SHELL', ''))
    return name if name in HOOKS else 'zsh'


@click.command(name='hook')
@click.argument('shell', type=click.Choice(sorted(HOOKS)), required=False)
def hook_handler(shell):
    """Print the snippet that runs 'dotsync check' before every prompt.

    SHELL: zsh or bash (default: from $SHELL)

    Examples:

    \b
        eval "$(dotsync hook zsh)"
        eval "$(dotsync hook bash)"
    """
    click.echo(HOOKS[shell or detect_shell()], nl=False)
