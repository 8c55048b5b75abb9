from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .errors import LineReverserError, UsageError
from .reverse import reverse_file
from .rules import EXIT_SUCCESS, EXPECTED_ARGC

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run `<program> <input-path> <output-path>` and return the exit status.

    Every error is reported here, on stderr, after the streams have
    already been released by reverse_file().
    """
    argv = list(sys.argv if argv is None else argv)
    program = argv[0] if argv else "line-reverser"

    logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")

    try:
        if len(argv) != EXPECTED_ARGC:
            raise UsageError(program)

        report = reverse_file(argv[1], argv[2])
    except LineReverserError as e:
        print(e, file=sys.stderr)
        return e.exit_status

    logger.debug("report: %s", report)
    return EXIT_SUCCESS


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
