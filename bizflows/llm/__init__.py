"""LLM transport layer."""
