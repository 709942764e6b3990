"""Entry point for ``python -m table2struct`` and the console script."""

import sys

from rich.console import Console

from .cli import CLIHandler, create_parser
from .logging_config import setup_logging


def main(argv=None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    console = Console()
    try:
        return CLIHandler(console).run(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
