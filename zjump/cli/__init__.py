"""CLI module for zjump."""
