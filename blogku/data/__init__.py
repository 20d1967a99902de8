"""Runtime data trackers."""
