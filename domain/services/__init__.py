"""
Domain services containing pure balancing and scheduling logic.
"""

from domain.services.balance_scorer import BalanceScorer, RosterWeightedBalanceScorer
from domain.services.match_scheduler import MatchScheduler
from domain.services.team_balancer import TeamBalancer

__all__ = ["BalanceScorer", "MatchScheduler", "RosterWeightedBalanceScorer", "TeamBalancer"]
