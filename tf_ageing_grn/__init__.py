"""
tf_ageing_grn: Transcription factor regulon enrichment in ageing and
Alzheimer's disease gene sets.

Analyses:
    1. loaders          — ageing, Alzheimer's and human TF reference sets
    2. regulon_builder  — high-confidence (A/B) TF–target regulons
    3. enrichment       — Fisher's exact ORA per regulon, BH correction, ranking
    4. pipeline         — both analyses end to end, charts and edge export
"""

__version__ = "0.1.0"
