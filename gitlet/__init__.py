# Gitlet: a small, single-node version control system
# The `commands` package holds one module per CLI command; `utils` holds the object store, refs, index and merge engine they share

__version__ = "0.1.0"
