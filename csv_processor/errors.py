"""Errors raised by the CSV processing core.

Parse failures are terminal for the call that raised them; the caller shows
the message and lets the user try another file. Date and amount problems are
never raised, they degrade to blank dates and zero amounts.
"""


class CSVProcessingError(Exception):
    """Base class for every error the core raises."""


class EmptyInputError(CSVProcessingError):
    def __init__(self, message: str = "CSV string is empty"):
        super().__init__(message)


class NoDataError(CSVProcessingError):
    def __init__(self, message: str = "No valid data found in CSV"):
        super().__init__(message)


class NoDocumentError(CSVProcessingError):
    def __init__(self, message: str = "No CSV data available to process"):
        super().__init__(message)
