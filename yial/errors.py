
class YialError(Exception):
    """ Base class for all yial errors"""
    pass

class YialLexError(YialError):
    """ Raised when source text cannot be split into tokens"""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)

class YialParseError(YialError):
    """ Raised when the token sequence does not form a valid program"""

class YialEvalError(YialError):
    """ Base class for errors raised while evaluating a form"""

class YialUnboundSymbol(YialEvalError):
    """ Raised when a symbol is used before it is bound"""

class YialSyntaxError(YialEvalError):
    """ Raised when a special form or call form is malformed"""

class YialArityError(YialEvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class YialTypeError(YialEvalError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class YialNotCallable(YialTypeError):
    """ Raised when the head of a call form is not a function"""

class YialOverflowError(YialEvalError):
    """ Raised when an integer result does not fit in 64 bits"""

class YialRecursionError(YialEvalError):
    """ Raised when evaluation nests deeper than the configured limit"""

class YialNativeError(YialEvalError):
    """ Raised when a native function fails with a non-yial exception"""
