"""Error taxonomy for the fetch pipeline - Pure data.

Every kind is handled where it occurs and degrades to an empty or
absent value. None of them is raised to the caller.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Why a pipeline stage produced no usable output.

    Attributes:
        INVALID_URL: Endpoint string is not a well-formed absolute URL
        NETWORK_FAILURE: Connection, timeout or stream I/O fault
        NON_SUCCESS_STATUS: HTTP status other than 200
        PARSE_FAILURE: Malformed JSON or missing/mistyped field
        EMPTY_RESULT: Empty body or a response with zero features
    """
    INVALID_URL = "invalid_url"
    NETWORK_FAILURE = "network_failure"
    NON_SUCCESS_STATUS = "non_success_status"
    PARSE_FAILURE = "parse_failure"
    EMPTY_RESULT = "empty_result"
