# =============================================================================
# ADS-OPS Apply Module
# =============================================================================
"""
Mutation request preparation.

Builds the request handed to the mutate executor from normalized
operations. The executor itself (transport, partial failure parsing)
lives outside this package.
"""
