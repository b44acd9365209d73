"""Static reference data: activity catalog and tip content."""
