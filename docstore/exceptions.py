"""Errors raised by the document store.

Every failure is fatal at the point it happens and propagates to the caller;
the store never retries or rolls back.
"""


class JsonStoreError(Exception):
    """Base class for all document store errors."""


class DecodeError(JsonStoreError, ValueError):
    # Malformed JSON content
    pass


class WriteError(JsonStoreError):
    # Encoded document could not be written to its path
    pass


class CopyError(JsonStoreError):
    # Backup or restore copy failed
    pass


class InvalidParametersError(JsonStoreError, ValueError):
    # Bad pagination arguments
    pass


class InvalidSourceError(JsonStoreError, ValueError):
    # Neither an existing file nor a JSON string
    pass


class ShapeError(JsonStoreError, TypeError):
    # Flat records and named locations mixed in one document
    pass
