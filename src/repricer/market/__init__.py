"""Market models feeding the simulator."""

from repricer.market.competitor import (
    CompetitorModel,
    CompetitorParams,
    ReplayCompetitor,
    SinusoidalCompetitor,
    competitor_base_price,
)

__all__ = [
    "CompetitorModel",
    "CompetitorParams",
    "ReplayCompetitor",
    "SinusoidalCompetitor",
    "competitor_base_price",
]
