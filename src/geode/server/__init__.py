"""Request handling boundary — dispatch, error containment, and output."""
