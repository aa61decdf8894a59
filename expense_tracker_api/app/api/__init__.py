"""
HTTP layer.

``router`` aggregates the domain routers; ``deps`` holds the
dependencies that build services for each request.
"""
