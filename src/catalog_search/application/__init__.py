"""Application layer – search use cases over the catalog index."""
