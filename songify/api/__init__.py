"""HTTP adapter over the auth core: routes, schemas and middleware."""
