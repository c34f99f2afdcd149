"""Live regex filter for a command's output.

Entry point: greptap <command> [args...]
"""

import sys

from .config import ConfigError, get_settings
from .logs import install_log
from .session import run_session

USAGE = "Usage: greptap <command> [args...]"


def main(argv: list[str] | None = None) -> int:
    """Run the command given on the command line under a greptap session.

    Everything after the program name belongs to the wrapped command, so no
    options are parsed here.

    Returns:
        2 on a usage or configuration error, otherwise 0. The wrapped
        command's exit code is only shown in the session.
    """
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    try:
        settings = get_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    log = install_log(settings.log_level)
    for line in run_session(args, settings, log):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
