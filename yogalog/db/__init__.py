"""Declarative base, script session factory and catalog seeding."""
