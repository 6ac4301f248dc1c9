"""Custom exceptions for tblgen-rules."""


class TblgenRulesError(Exception):
    """Base exception for all tblgen-rules errors."""


class UnrecognizedOutputError(TblgenRulesError):
    """Raised when an output file name matches no known generator mode."""

    def __init__(self, output: str, module: str | None = None):
        self.output = output
        self.module = module
        message = f'couldn\'t map output file "{output}" to a generator'
        if module:
            message = f"module {module!r}: {message}"
        super().__init__(message)


class UnresolvedPathError(TblgenRulesError):
    """Raised when a declared input cannot be located relative to its module."""

    def __init__(self, path: str, module: str | None = None):
        self.path = path
        self.module = module
        message = f"cannot locate input {path!r}"
        if module:
            message = f"module {module!r}: {message}"
        super().__init__(message)


class ModuleConfigError(TblgenRulesError):
    """Raised when a module declaration is malformed."""


class DuplicateOutputError(ModuleConfigError):
    """Raised when two build actions claim the same output path."""

    def __init__(self, output: str, first: str, second: str):
        self.output = output
        self.first = first
        self.second = second
        super().__init__(
            f"output {output!r} is produced by both {first!r} and {second!r}"
        )
