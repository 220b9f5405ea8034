"""Repository curation pipeline.

Stages run strictly forward: source, basic filter, enrichment, quality
gate, classification, featured selection, snapshot.
"""
