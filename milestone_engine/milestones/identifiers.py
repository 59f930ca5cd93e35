"""Deterministic identifiers for milestone definitions.

Identifiers are derived from (category, name) rather than assigned, so a
redistributed catalog keeps every unchanged milestone's identity and stored
achievements keep pointing at the right definition.
"""

import hashlib


def generate_milestone_id(category: str, name: str) -> str:
    """
    Derive a stable, UUID-shaped identifier for a milestone.

    SHA-256 of ``"<category>:<name>"`` rendered as lowercase hex, sliced
    into 8-4-4-4-12 groups. The third group always starts with ``4`` and
    the fourth with ``8``. Not a random UUID: the same inputs always give
    the same id.

    Args:
        category: Milestone category (e.g. "motor")
        name: Milestone name, unique within its category

    Returns:
        Identifier such as "dd9a2f13-8081-4cf7-8a13-74b6b2c285f3"
    """
    digest = hashlib.sha256(f"{category}:{name}".encode("utf-8")).hexdigest()

    return "-".join([
        digest[0:8],
        digest[8:12],
        "4" + digest[13:16],
        "8" + digest[17:20],
        digest[20:32],
    ])
