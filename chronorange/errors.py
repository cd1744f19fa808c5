class RangeError(ValueError):
    """Base class for errors raised while building a Range."""


class InvalidInputError(RangeError):
    """Boundary instants are not strictly ascending, or a description is malformed."""


class UnrepresentableError(RangeError):
    """A segment/closure pattern does not reduce to a shape a Range can encode."""
