class StrassenError(Exception):
    """Base class for every failure raised by strassen_lib."""


_OP_WORDS = {
    "add": "Addition",
    "sub": "Subtraction",
    "neg": "Negation",
    "mul": "multiplication",
}


class ArithmeticOverflow(StrassenError, ArithmeticError):
    """A checked add/sub/neg/mul could not be represented in the element type."""

    def __init__(self, operation, a, b=None):
        self.operation = operation
        self.a = a
        self.b = b
        word = _OP_WORDS.get(operation, operation)
        if b is None:
            msg = f"{word} overflow for a = {a}"
        else:
            msg = f"{word} overflow for a = {a} b = {b}"
        super().__init__(msg)


class InvalidDimension(StrassenError, ValueError):
    def __init__(self, n, reason):
        self.n = n
        self.reason = reason
        super().__init__(f"Invalid dimension n = {n}: {reason}")


class MatrixFormatError(StrassenError, ValueError):
    def __init__(self, message, line=None, column=None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class RemoteMultiplyError(StrassenError):
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed with status {status_code}: {body}")
