"""Content catalogs: topics, library articles, snippets, blogs and questions."""
