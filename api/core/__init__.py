"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks the feature packages rely on
(DB pool wiring, env settings, logging, request middleware). Keep
news-specific SQL and response shaping in `news/`.
"""
