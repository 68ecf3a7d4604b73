"""Component packages scanned by the discovery tests."""
