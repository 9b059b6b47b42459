"""
Intcode VM: Configuration

Module-level defaults. CLI flags and keyword arguments override these
at the call site; nothing here is mutated at runtime.
"""

# =============================================================================
#  WORD FORMAT
# =============================================================================
WORD_BITS = 64                      # signed, two's complement
WORD_MIN = -(1 << (WORD_BITS - 1))
WORD_MAX = (1 << (WORD_BITS - 1)) - 1

# Program loaded by a Computer constructed without a tape: a lone HALT
DEFAULT_PROGRAM = (99,)


# =============================================================================
#  EXECUTION LIMITS
# =============================================================================
# Default budget for the CLI. Library run() is unbounded unless given one.
DEFAULT_MAX_STEPS = 10_000_000

# Trace lines kept in memory when tracing is enabled (oldest dropped first)
TRACE_LIMIT = 100_000


# =============================================================================
#  LOGGING
# =============================================================================
LOGGER_NAME = "intcode_vm"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


# =============================================================================
#  CLI EXIT CODES
# =============================================================================
EXIT_OK = 0
EXIT_PROGRAM_ERROR = 1      # bad tape, illegal opcode, step limit, ...
EXIT_INTERNAL_ERROR = 2
EXIT_AWAITING_INPUT = 3     # program blocked on input when the run ended
