"""Question retrieval: facet resolution, filtering, sorting and random sampling."""
