"""
Deterministic reversal rules.

This file exists to keep the fixed behaviour of the tool in one place.
"""

NEWLINE = b"\n"
END_OF_INPUT = -1

USAGE_TEMPLATE = "Usage: {program} [in-file] [out-file]"
EXPECTED_ARGC = 3  # program, in-file, out-file

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

INITIAL_BUFFER_CAPACITY = 8
ENCODING_SAMPLE_SIZE = 4096
