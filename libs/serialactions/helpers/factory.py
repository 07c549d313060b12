"""Factory functions for loading and saving the actions of a project."""

import json
import logging
from collections.abc import Iterable
from typing import Any

from serialactions.models.action import Action

logger = logging.getLogger(__name__)


def parse_actions(data: str | bytes | list[Any] | dict[str, Any]) -> list[Action]:
    """Parse project data into Actions.

    Args:
        data: JSON string, bytes, a list of action documents, or a project
            mapping holding an `"actions"` list.

    Returns:
        The actions that could be read. Each action's id is the index of its
        document in the project array, so skipped documents leave gaps.

    Raises:
        ValueError: If the data is not valid JSON or has no actions array.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    if isinstance(data, str):
        data = json.loads(data)
    if isinstance(data, dict):
        data = data.get("actions")
    if not isinstance(data, list):
        raise ValueError("Project data must be a list of actions or contain an 'actions' list")

    actions: list[Action] = []
    for index, document in enumerate(data):
        action = Action(index)
        if action.read(document):
            actions.append(action)
        else:
            logger.warning("Skipping empty action document at index %d", index)
    return actions


def serialize_actions(actions: Iterable[Action]) -> list[dict[str, Any]]:
    """Serialize actions in project order (by action id)."""
    return [action.serialize() for action in sorted(actions, key=lambda a: a.action_id)]
