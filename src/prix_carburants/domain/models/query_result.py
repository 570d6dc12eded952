"""Query result domain model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from prix_carburants.domain.models.station import Station


class QueryStatus(str, Enum):
    """Outcome of a station query."""

    OK = "ok"
    NO_RESULTS = "no_results"
    INVALID_INPUT = "invalid_input"


class QueryResult(BaseModel):
    """Stations returned by a query, plus a message to show the user if any."""

    model_config = ConfigDict(frozen=True)

    stations: tuple[Station, ...] = ()
    status: QueryStatus = QueryStatus.OK
    message: str | None = None

    @property
    def is_invalid_input(self) -> bool:
        return self.status is QueryStatus.INVALID_INPUT

    @classmethod
    def found(cls, stations: list[Station], empty_message: str) -> "QueryResult":
        """Wrap fetched stations, switching to NO_RESULTS when there are none."""
        if not stations:
            return cls(status=QueryStatus.NO_RESULTS, message=empty_message)
        return cls(stations=tuple(stations))

    @classmethod
    def no_results(cls, message: str) -> "QueryResult":
        return cls(status=QueryStatus.NO_RESULTS, message=message)

    @classmethod
    def invalid_input(cls, message: str) -> "QueryResult":
        return cls(status=QueryStatus.INVALID_INPUT, message=message)
