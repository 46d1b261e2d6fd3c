"""Domain services for tasks and the audit trail."""
