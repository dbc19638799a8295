"""Trust score library — derived accountability score for politicians.

Public API:
    - TrustInputs: Score inputs, built from a politician row
    - compute_trust_score: Pure scoring function
"""

from civicos.lib.trust_score.scorer import TrustInputs, compute_trust_score

__all__ = ["TrustInputs", "compute_trust_score"]
