class WindowizeError(Exception):
    """Base exception for the package"""
    pass

class InvalidArgument(WindowizeError, ValueError):
    """Raised when sizes, coordinates, intervals or policies are malformed"""
    pass

class OutOfRange(WindowizeError, IndexError):
    """Raised when a coordinate falls beyond the span covered by the window table"""
    pass

class InputError(WindowizeError):
    """Raised when input files are missing, unreadable or lack the requested contig"""
    pass
