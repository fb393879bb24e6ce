"""Gemini status codes.

Two-digit codes; the first digit selects the category the client acts
on (input, success, redirect, temporary/permanent failure, certificate).
"""

from enum import IntEnum


class Status(IntEnum):
    """Every status code a response may carry."""

    INPUT = 10
    SENSITIVE_INPUT = 11
    SUCCESS = 20
    REDIRECT_TEMPORARY = 30
    REDIRECT_PERMANENT = 31
    TEMPORARY_FAILURE = 40
    SERVER_UNAVAILABLE = 41
    CGI_ERROR = 42
    PROXY_ERROR = 43
    SLOW_DOWN = 44
    PERMANENT_FAILURE = 50
    NOT_FOUND = 51
    GONE = 52
    PROXY_REQUEST_REFUSED = 53
    BAD_REQUEST = 59
    CLIENT_CERTIFICATE_REQUIRED = 60
    CERTIFICATE_NOT_AUTHORISED = 61
    CERTIFICATE_NOT_VALID = 62

    @property
    def category(self) -> int:
        """The category code (10, 20, ... 60) this status belongs to."""
        return self.value // 10 * 10

    @property
    def is_input(self) -> bool:
        return self.category == 10

    @property
    def is_success(self) -> bool:
        return self.category == 20

    @property
    def is_redirect(self) -> bool:
        return self.category == 30

    @property
    def is_failure(self) -> bool:
        """True for both temporary (4x) and permanent (5x) failures."""
        return self.category in (40, 50)

    @property
    def is_certificate(self) -> bool:
        return self.category == 60
