"""Task list backend application package."""
