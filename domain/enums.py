"""
Domain enums for the meal plan parser.
Contains all enumeration types used across the domain schemas and services.
"""

import enum


class ProtocolVersion(str, enum.Enum):
    """Wire revisions of the structured block embedded in assistant messages"""

    JSON = "json"  # current revision, canonical
    XML = "xml"  # legacy tag-delimited revision


class ParseStatus(str, enum.Enum):
    """Outcome of parsing a single assistant message"""

    OK = "ok"
    NOT_FOUND = "not_found"
    SYNTAX_FAILURE = "syntax_failure"
    STRUCTURAL_VIOLATION = "structural_violation"


class ChatRole(str, enum.Enum):
    """Author of a chat message"""

    USER = "user"
    ASSISTANT = "assistant"
