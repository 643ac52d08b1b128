"""HTTP primitives: request, response, headers."""
