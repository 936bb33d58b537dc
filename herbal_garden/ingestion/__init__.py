"""Knowledge base ingestion into the vector index."""
