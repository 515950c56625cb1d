"""JavaScript handbook backend: content catalogs and learner progress."""
