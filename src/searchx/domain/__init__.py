"""Domain layer: values, documents, expressions and search envelopes.

No dependency on the storage or observability layers.
"""
