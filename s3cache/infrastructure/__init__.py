"""Infrastructure: cache connection, storage transport and their exceptions."""
