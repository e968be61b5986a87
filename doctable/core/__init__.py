"""
Mapping engine: models, errors, flattening, expansion, transforms and column inference.
"""
