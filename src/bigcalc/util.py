from enum import Enum
from functools import wraps


class CalcError(Exception):
    pass


class ErrorKind(Enum):
    '''
    Kinds of parse and evaluation errors, valued by their message text.
    '''
    UNEXPECTED_TOKEN = 'unexpected token'
    TOKEN_EXPECTED = 'expected'
    UNKNOWN_IDENTIFIER = 'unknown identifier'
    RESERVED_WORD = 'cannot assign to reserved word'
    MALFORMED_NUMBER = 'malformed number'
    DIVIDE_BY_ZERO = 'divide by zero'
    FACTORIAL_DOMAIN = 'factorial requires a non-negative integer'
    INTEGER_REQUIRED = 'integer operand required'
    INVALID_OPERAND = 'invalid operand'
    INVALID_OPTION = 'invalid option'


class ParseError(CalcError):
    '''
    Error raised while lexing, parsing or evaluating one input line.

    :param kind: ErrorKind.
    :param expected: TokenKind that was required, for TOKEN_EXPECTED only.
    '''

    def __init__(self, kind, expected=None):
        super().__init__(kind, expected)
        self.kind = kind
        self.expected = expected

    def error_str(self):
        '''
        Return the human readable message, e.g. 'Error: ")" expected.'
        '''
        text = 'Error: '
        if self.kind is ErrorKind.TOKEN_EXPECTED and \
           self.expected is not None:
            text += self.expected.value + ' '
        text += self.kind.value
        text += '.'
        return text

    def __str__(self):
        return self.error_str()


def wrap_user_errors(kind):
    '''
    Ugly hack decorator that converts library exceptions to ParseErrors.

    Passes through CalcErrors. Division by zero is always reported as such,
    anything else arithmetic as kind.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except ZeroDivisionError as e:
                raise ParseError(ErrorKind.DIVIDE_BY_ZERO) from e
            except (ArithmeticError, ValueError) as e:
                raise ParseError(kind) from e
        return wrapper
    return decorator
