

class MalError(Exception):
    """ Base class for all mal errors"""
    pass

class MalSyntaxError(MalError):
    """ Raised when source text is malformed"""

class MalUnexpectedEndOfInput(MalSyntaxError):
    """ Raised when the reader runs out of tokens in the middle of a form"""

class MalInvalidSymbol(MalError):
    """ Raised when something other than a symbol is used as a binding name"""

class MalUnboundSymbol(MalError):
    """ Raised when a symbol is used before it is bound"""

    def __init__(self, name: str, message: str | None = None):
        super().__init__(message or f"'{name}' not found")
        self.name = name

class MalArityError(MalError):
    """ Raised when the number of arguments passed to a function or form is incorrect"""

class MalBindingArityError(MalArityError):
    """ Raised when a let* binding list does not pair every name with an expression"""

class MalTypeError(MalError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class MalNotCallable(MalTypeError):
    """ Raised when the head of an application does not evaluate to a function"""

class MalArithmeticError(MalError):
    """ Raised on arithmetic failures such as division by zero"""

class MalInvariantError(MalError):
    """ Raised when an internal invariant is broken (e.g. a function returned no result).

    Not recoverable: the REPL logs it and re-raises.
    """
