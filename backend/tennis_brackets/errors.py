"""
Domain errors raised by the bracket engine and the aggregate services.

Each error carries the HTTP status the API layer answers with; the services
themselves never import FastAPI.
"""


class BracketError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTeamCount(BracketError, ValueError):
    """Team count is below/above the configured bounds or not a power of two."""

    status_code = 422


class InvalidScore(BracketError, ValueError):
    """Tied, negative or contradictory score submission."""

    status_code = 422


class InvalidBracketPosition(BracketError, ValueError):
    """Round/match index pair that does not exist in the bracket."""

    status_code = 422


class NotFound(BracketError, LookupError):
    status_code = 404

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class StoreUnavailable(BracketError):
    """Persistence failed; the transaction was rolled back and is not retried."""

    status_code = 503
