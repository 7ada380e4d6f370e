"""Users module: tenant members and roles."""
