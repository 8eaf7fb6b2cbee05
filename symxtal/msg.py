from warnings import warn

from symxtal.constants import symxtal_verbosity


def printx(text, priority=1):
    """
    Custom printing function based on verbosity.

    Args:
        text: string to be passed to print
        priority: the importance of printing the message
            0: Critical; must be printed
            1: Warning; unexpected error but program functioning
            2: Info; useful but not necessary print out
            3: Debug; detailed information for debugging

    Returns:
        Nothing
    """
    if priority <= 1:
        warn(text)
        return
    else:
        if priority <= symxtal_verbosity:
            print(text)


class Error(Exception):
    """Base class for exceptions in this module."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidTriplet(Error, ValueError):
    """Exception raised for malformed coordinate triplets.

    Attributes:
        expression -- the triplet (or its part) that failed to parse
        message -- explanation of the error
    """

    def __init__(self, message, expression=None):
        super().__init__(message)
        self.expression = expression


class InvalidHallSymbol(Error, ValueError):
    """Exception raised for errors in the Hall symbol.

    Attributes:
        expression -- the offending part of the Hall symbol
        message -- explanation of the error
    """

    def __init__(self, message, expression=None):
        super().__init__(message)
        self.expression = expression


class SingularMatrix(Error):
    """Exception raised when inverting an operation with zero determinant.

    Attributes:
        message -- explanation of the error
    """


class GroupTooLarge(Error):
    """Exception raised when the closure of generators exceeds its bound.

    Attributes:
        maxsize -- the maximum number of operations allowed
        message -- explanation of the error
    """

    def __init__(self, maxsize, message=None):
        if message is None:
            message = f"{maxsize}+ elements in the group should not happen"
        super().__init__(message)
        self.maxsize = maxsize


class SpaceGroupNotFound(Error, ValueError):
    """Exception raised when a space group cannot be found in the table.

    Attributes:
        expression -- the name or number that was looked up
        message -- explanation of the error
    """

    def __init__(self, message, expression=None):
        super().__init__(message)
        self.expression = expression
