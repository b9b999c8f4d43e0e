"""Domain records: corpora, options, owned models, views and errors."""
