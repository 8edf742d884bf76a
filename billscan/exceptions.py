"""
Request-level errors raised by the HTTP layer.

The extraction functions themselves never raise for bad content; these only
cover requests the API refuses to process.
"""


class BillscanError(Exception):
    """Base class for request errors."""
    status_code = 400


class TextTooLargeError(BillscanError):
    """Submitted text exceeds the configured limit."""
    status_code = 413

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Text too large: {length} characters. Maximum: {limit}")
