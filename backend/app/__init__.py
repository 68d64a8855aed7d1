"""Employee records REST backend."""
