"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple resources use
(DB wiring, schema bootstrap, response envelope). Keep resource-specific SQL
and business logic in the corresponding package (e.g. `recipes/`).
"""
