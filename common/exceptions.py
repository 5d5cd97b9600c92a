class LedgerError(Exception):
    """Base class for errors raised by the services."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        if cause is not None:
            self.__cause__ = cause


class ValidationError(LedgerError):
    """Input failed a schema or business check; nothing was written."""

    def __init__(self, message, errors=None, cause=None):
        super().__init__(message, cause)
        self.errors = errors or {}


class NotFoundError(LedgerError):
    def __init__(self, resource, record_id):
        super().__init__(f"{resource} with id {record_id} not found")
        self.resource = resource
        self.record_id = record_id


class PartialWriteError(LedgerError):
    """
    An item insert failed after the transaction header (and possibly some
    items) were already written. Nothing is rolled back.
    """

    def __init__(self, transaction_id, written_items, expected_count, cause=None):
        super().__init__(
            f"Transaction {transaction_id}: wrote {len(written_items)} of "
            f"{expected_count} items before failing",
            cause,
        )
        self.transaction_id = transaction_id
        self.written_items = written_items
        self.expected_count = expected_count
