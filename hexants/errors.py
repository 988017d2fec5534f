import sys


class HexantsError(Exception):
    """Base class for errors raised by the bot core."""
    pass


class StructuralError(HexantsError):
    """Malformed startup topology. Planning is impossible on such a grid."""
    pass


class NoPathFound(HexantsError):
    """A breadth-first search exhausted its component without a match."""
    pass


class EmptyCandidateSet(HexantsError):
    """No resource cell is eligible this turn."""
    pass


def _custom_excepthook(exc_type, exc_value, exc_traceback):
    """Print a one-line message for fatal startup errors instead of a traceback."""
    if issubclass(exc_type, HexantsError):
        print(f"Error: {exc_value}", file=sys.stderr)
        sys.exit(1)
    else:
        sys.__excepthook__(exc_type, exc_value, exc_traceback)


def install_excepthook():
    sys.excepthook = _custom_excepthook
