"""typedpipe: a type-constrained store with an asynchronous processing pipeline."""
