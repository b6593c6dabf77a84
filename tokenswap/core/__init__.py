"""Core swap and execution logic."""
