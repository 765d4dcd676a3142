# This file makes the 'utils' directory a Python package
# Each module covers one engine concern: objects, graph, index, repository (refs), merge, workdir, ignore, fileio, lock, config, errors
