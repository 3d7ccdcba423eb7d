"""
Error taxonomy

Every failure a caller can see is a WagerError carrying the HTTP status the
API answers with. main.py maps them to responses.
"""


class WagerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Authorization errors

class Unauthenticated(WagerError):
    status_code = 401


class PermissionDenied(WagerError):
    status_code = 403


class NotFound(WagerError):
    status_code = 404


# Validation errors

class InvalidArgument(WagerError):
    status_code = 400


class MissingAnswerKey(WagerError):
    status_code = 400


class Conflict(WagerError):
    status_code = 409


class AmbiguousAnswerKey(Conflict):
    pass


# External dependency errors

class StoreError(WagerError):
    status_code = 503

    GENERIC_MESSAGE = "Something went wrong. Please try again."
