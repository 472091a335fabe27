"""Application-level routes. Feature routes live in their modules."""
