"""Tasks module: tenant-scoped task tracking."""
