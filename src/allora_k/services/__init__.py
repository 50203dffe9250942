"""HTTP clients and the LLM service."""
