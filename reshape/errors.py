"""
Exceptions raised by the reshape pipeline.

Both kinds are fatal for a run: the pipeline either returns a complete table
or raises, never a partial result.
"""


class ReshapeError(Exception):
    """Base class for reshape failures."""

    def __init__(self, message, rule=None):
        self.rule = rule
        if rule:
            message = f"{rule}: {message}"
        super().__init__(message)


class SchemaError(ReshapeError):
    """A required column or category is missing or misnamed."""

    def __init__(self, message, rule=None, names=None):
        self.names = list(names) if names else []
        super().__init__(message, rule=rule)


class ComputationError(ReshapeError):
    """A percentage is undefined or a grouping key is absent."""

    def __init__(self, message, rule=None, group=None):
        self.group = group
        super().__init__(message, rule=rule)
