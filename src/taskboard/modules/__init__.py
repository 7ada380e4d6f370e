"""Feature modules: tenants, users and tasks."""
