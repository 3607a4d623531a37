"""
Message layer for orestes.

This package compiles declarative message specifications and provides the
Message base class every request against the service is built from.
"""

from orestes.message.connect import Connect
from orestes.message.message import Message, Request, format_etag
from orestes.message.oauth import (
    OAUTH,
    FacebookOAuth,
    GitHubOAuth,
    GoogleOAuth,
    LinkedInOAuth,
    SalesforceOAuth,
    TwitterOAuth,
)
from orestes.message.specification import (
    MessageSpecification,
    compile_specification,
    external_specification,
)
from orestes.message.status import StatusCode

__all__ = [
    "Connect",
    "FacebookOAuth",
    "GitHubOAuth",
    "GoogleOAuth",
    "LinkedInOAuth",
    "Message",
    "MessageSpecification",
    "OAUTH",
    "Request",
    "SalesforceOAuth",
    "StatusCode",
    "TwitterOAuth",
    "compile_specification",
    "external_specification",
    "format_etag",
]
