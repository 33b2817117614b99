"""
Base helpers for form builder contracts.
"""

import uuid


# ==================== HELPER FUNCTIONS ====================


def generate_element_id() -> str:
    """
    Generate a collision-resistant id for a new form element.

    Element ids are the keys of submission payloads, so they must stay unique
    for the lifetime of a layout even after elements are removed.

    Returns:
        UUID string (e.g., "550e8400-e29b-41d4-a716-446655440000")
    """
    return str(uuid.uuid4())
