"""Expansion opportunity clustering."""

from .clustering import GridClustering, find_opportunities
from .models import ClusteringResult, OpportunityZone

__all__ = ["GridClustering", "find_opportunities", "ClusteringResult", "OpportunityZone"]
