"""Tenants module: organizations, their config and the admin console."""
