"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks the feature packages lean on
(settings, DB pool wiring, request scoping, error rendering, logging).
Feature-specific SQL and validation stay in the feature package (`users/`).
"""
