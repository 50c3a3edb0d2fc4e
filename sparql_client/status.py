"""
sparql_client.status
====================

Classification of HTTP status codes into call outcomes.

| status            | outcome           | raised as       |
|-------------------|-------------------|-----------------|
| 200–299           | SUCCESS           | (nothing)       |
| 400               | MALFORMED_QUERY   | MalformedQuery  |
| 401–499           | CLIENT_ERROR      | ClientError     |
| 500–599           | SERVER_ERROR      | ServerError     |
| anything else     | CLIENT_ERROR      | ClientError     |

None of these outcomes is retried.
"""

from enum import StrEnum

import requests
from loguru import logger

from .errors import ClientError, MalformedQuery, ServerError


class ResponseOutcome(StrEnum):
    SUCCESS = "success"
    MALFORMED_QUERY = "malformed_query"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


def classify_status(status_code: int) -> ResponseOutcome:
    """Map an HTTP status code to exactly one :class:`ResponseOutcome`."""
    if 200 <= status_code <= 299:
        return ResponseOutcome.SUCCESS
    if status_code == 400:
        return ResponseOutcome.MALFORMED_QUERY
    if 500 <= status_code <= 599:
        return ResponseOutcome.SERVER_ERROR
    return ResponseOutcome.CLIENT_ERROR


def raise_for_outcome(response: requests.Response) -> requests.Response:
    """
    Return ``response`` unchanged on 2xx, otherwise raise the matching
    error carrying the response body.
    """
    outcome = classify_status(response.status_code)
    if outcome is ResponseOutcome.SUCCESS:
        return response

    body = response.text
    logger.debug(f"endpoint answered {response.status_code} ({outcome})")
    if outcome is ResponseOutcome.MALFORMED_QUERY:
        raise MalformedQuery(body, status_code=response.status_code)
    if outcome is ResponseOutcome.SERVER_ERROR:
        raise ServerError(body, status_code=response.status_code)
    raise ClientError(body, status_code=response.status_code)
