class EcalError(Exception):
    """Base error."""


class InvalidRuleSyntax(EcalError):
    """Raised when an event file line cannot be turned into a rule."""

    def __init__(self, line_number: int, text: str, reason: str):
        self.line_number = line_number
        self.text = text
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {text!r}")


class InvalidConfig(EcalError):
    """Raised when the calendar configuration cannot be used for rendering."""


class EasterComputationDomainError(EcalError):
    """Raised when Easter is requested for a year outside the Gregorian range."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"Easter is only defined for years >= 1583, got {year}")


class EventFileError(EcalError):
    """Raised when the event file exists but cannot be decoded."""
