"""Relational domain store: donors, images, specimens and genomic data."""
