import click
import json
import sys

from monotag.config import load_config, get_config_path
from monotag.exit_codes import ConfigError


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), envvar="MONOTAG_CONFIG",
              help="Config file to load instead of .monotag.* discovery")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSON")
@click.option("--path", is_flag=True, help="Show the config file path being used")
def show_config(config_path, pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON.
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    try:
        if path:
            found = config_path or get_config_path()
            print(json.dumps({"config_path": str(found) if found else None}))
            return

        config = load_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))
