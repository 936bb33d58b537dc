"""Shared infrastructure for the herbal garden backend: errors, logging, HTTP clients, chunking."""
