from explorewithme.stats_service.models.endpoint_hit import EndpointHit

__all__ = ["EndpointHit"]
