import click
import json
from typing import Optional

from ..cli_utils import config_file_option, handle_errors
from ..config import get_config_path, load_config


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@config_file_option
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@handle_errors
def show_config(config_file: Optional[str], pretty: bool, path: bool):
    """Show the current configuration with defaults and overrides applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path(config_file))}))
        return

    config = load_config(config_file)

    if pretty:
        print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config.to_dict(), ensure_ascii=False))
