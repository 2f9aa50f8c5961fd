from explorewithme.stats_service.schemas.hit import EndpointHitDto, ViewStatsDto

__all__ = ["EndpointHitDto", "ViewStatsDto"]
