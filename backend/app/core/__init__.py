"""Settings, auth, logging, and request handling infrastructure."""
