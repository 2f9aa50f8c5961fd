"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .stats_client import StatsClient, StatsClientError, get_stats_client, close_stats_client

__all__ = ['StatsClient', 'StatsClientError', 'get_stats_client', 'close_stats_client']
