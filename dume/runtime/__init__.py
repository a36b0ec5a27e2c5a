"""Runtime configuration, logging and app composition."""
