"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that several features use
(DB wiring, settings, logging, the LLM client). Feature-specific SQL and
business logic stays in the corresponding feature package
(e.g. `conversations/`).
"""
