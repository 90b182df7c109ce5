"""
Related products: typed, positioned relations between catalog records.
"""
