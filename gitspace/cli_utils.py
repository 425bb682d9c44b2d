"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
import click
from functools import wraps

from .exit_codes import INTERRUPTED, CommandError, get_exit_code_for_exception


def setup_logging(debug: bool) -> None:
    """Switch the gitspace loggers to DEBUG with timestamps when requested."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            force=True
        )


def handle_errors(func):
    """
    Decorator that turns engine errors into exit codes.

    - CommandError subclasses (ConfigError, PathError, ...) exit with their
      own code, the message on stderr. With --json the error is also written
      to stdout as a JSON object.
    - Stray OS errors exit with the code mapped to their class.
    - Ctrl+C exits with INTERRUPTED.
    - Click exceptions pass through untouched.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print("Interrupted by user", file=sys.stderr)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            print(f"Error: {e}", file=sys.stderr)
            if kwargs.get('output_json'):
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }
                if hasattr(e, 'succeeded'):
                    error_obj['succeeded'] = e.succeeded
                    error_obj['failed'] = e.failed
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(e.exit_code)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def config_file_option(func):
    """Shared --config-file option."""
    return click.option(
        '--config-file', '-c', type=click.Path(dir_okay=False),
        help='Path to config.json (default: $GITSPACE_CONFIG_FILE or .space/config.json)'
    )(func)


def output_options(func):
    """Shared --json / --pretty / --debug options."""
    func = click.option('--debug', is_flag=True, help='Enable debug logging')(func)
    func = click.option('--pretty', is_flag=True, help='Display with rich formatting')(func)
    func = click.option('--json', 'output_json', is_flag=True, help='Output as JSONL')(func)
    return func


def emit_json(obj) -> None:
    print(json.dumps(obj, ensure_ascii=False), flush=True)
