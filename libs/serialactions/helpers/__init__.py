from serialactions.helpers.factory import parse_actions, serialize_actions
from serialactions.helpers.validation import ActionDocument, validate_action_document

__all__ = [
    "ActionDocument",
    "parse_actions",
    "serialize_actions",
    "validate_action_document",
]
