import click
from dotsync.config import load_config, get_config_path
import json


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSON")
def show_config(pretty):
    """Show the current configuration with all merges applied.

    Includes overrides from DOTSYNC_* variables and the domain variables
    (DOTFILES_PATH, CLAUDE_DIR, CLAUDE_REPO_URL).
    """
    config = load_config()

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command("path")
def show_config_path():
    """Show the config file path being used."""
    print(json.dumps({"config_path": str(get_config_path())}))
