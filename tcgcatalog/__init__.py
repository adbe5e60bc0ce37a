"""Pokemon TCG reference catalog."""
