"""Host network helpers used by the polling signal source."""
