"""Tests for the opendatasoft station repository (pagination, fallback, city checks)."""

import aiohttp
import pytest

from prix_carburants.adapters.opendatasoft_api import OpendatasoftStationRepository
from prix_carburants.adapters.opendatasoft_api.opendatasoft_station_repository import (
    city_where_clause,
)
from tests.fakes import FakeResponse, FakeSession, records_page, station_record

PRIMARY_URL = "https://primary.example/records"
FALLBACK_URL = "https://fallback.example/records"


def make_repository(
    session: FakeSession, *, page_size: int = 2, max_records: int = 1000
) -> OpendatasoftStationRepository:
    return OpendatasoftStationRepository(
        session,  # type: ignore[arg-type]
        records_url=PRIMARY_URL,
        fallback_url=FALLBACK_URL,
        page_size=page_size,
        max_records=max_records,
    )


class TestFetchAll:
    """Tests for paginated fetching of every station."""

    @pytest.mark.asyncio
    async def test_when_last_page_is_short_then_pagination_stops(self) -> None:
        """Given a full page then a short page, when fetching, then both pages are concatenated."""
        session = FakeSession(
            responses=[
                records_page([station_record(1, "Lyon"), station_record(2, "Paris")]),
                records_page([station_record(3, "Nice")]),
            ]
        )

        stations = await make_repository(session).fetch_all()

        assert [s.id for s in stations] == ["1", "2", "3"]
        assert [call.params for call in session.calls] == [
            {"limit": 2, "offset": 0},
            {"limit": 2, "offset": 2},
        ]

    @pytest.mark.asyncio
    async def test_when_total_count_reached_then_no_extra_request(self) -> None:
        """Given total_count equal to the records served, when fetching, then it stops there."""
        session = FakeSession(
            responses=[
                records_page([station_record(1, "Lyon"), station_record(2, "Paris")], 4),
                records_page([station_record(3, "Nice"), station_record(4, "Metz")], 4),
            ]
        )

        stations = await make_repository(session).fetch_all()

        assert len(stations) == 4
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_when_max_records_reached_then_pagination_stops(self) -> None:
        """Given max_records=3, when fetching, then the last page only asks for what is left."""

        def handler(_url: str, params: dict) -> FakeResponse:
            offset, limit = params["offset"], params["limit"]
            return records_page(
                [station_record(offset + i, "Lyon") for i in range(limit)], total_count=50
            )

        session = FakeSession(handler=handler)

        stations = await make_repository(session, max_records=3).fetch_all()

        assert len(stations) == 3
        assert [call.params["limit"] for call in session.calls] == [2, 1]

    @pytest.mark.asyncio
    async def test_when_later_page_fails_then_partial_results_are_returned(self) -> None:
        """Given a failing second page, when fetching, then the first page is kept."""
        session = FakeSession(
            responses=[
                records_page([station_record(1, "Lyon"), station_record(2, "Paris")]),
                FakeResponse({"error": "boom"}, status=500),
            ]
        )

        stations = await make_repository(session).fetch_all()

        assert [s.id for s in stations] == ["1", "2"]
        assert len(session.calls) == 2

    @pytest.mark.parametrize(
        "failure",
        [
            FakeResponse({"error": "unavailable"}, status=503),
            FakeResponse(body=""),
            FakeResponse(body="<html>not json</html>"),
            FakeResponse({"total_count": 3}),
            FakeResponse({"results": "nope"}),
            FakeResponse(error=aiohttp.ClientConnectionError("connection refused")),
            FakeResponse(error=TimeoutError()),
        ],
    )
    @pytest.mark.asyncio
    async def test_when_first_page_fails_then_empty_list(self, failure: FakeResponse) -> None:
        """Given any kind of page failure, when fetching, then an empty list is returned."""
        session = FakeSession(responses=[failure])

        stations = await make_repository(session).fetch_all()

        assert stations == []
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_malformed_records_are_skipped(self) -> None:
        """Given a page holding a non-object record, when fetching, then only it is skipped."""
        session = FakeSession(
            responses=[records_page([station_record(1, "Lyon"), 42], total_count=2)]
        )

        stations = await make_repository(session).fetch_all()

        assert [s.id for s in stations] == ["1"]

    @pytest.mark.asyncio
    async def test_fetching_twice_yields_equal_results(self) -> None:
        """Given an unchanged source, when fetching twice, then results are equal element-wise."""
        records = [station_record(1, "Lyon"), station_record(2, "Paris")]
        session = FakeSession(handler=lambda _url, _params: records_page(records, 2))
        repository = make_repository(session)

        first = await repository.fetch_all()
        second = await repository.fetch_all()

        assert first == second
        assert len(first) == 2

    @pytest.mark.asyncio
    async def test_itinerary_candidates_are_all_stations(self) -> None:
        session = FakeSession(responses=[records_page([station_record(1, "Lyon")])])

        stations = await make_repository(session).fetch_itinerary_candidates()

        assert [s.city for s in stations] == ["Lyon"]


class TestFetchByCity:
    """Tests for the filtered city query."""

    @pytest.mark.asyncio
    async def test_city_query_uses_like_filter_on_city_field(self) -> None:
        session = FakeSession(responses=[records_page([station_record(1, "Lyon")])])

        await make_repository(session).fetch_by_city("Lyon")

        assert len(session.calls) == 1
        assert session.calls[0].url == PRIMARY_URL
        assert session.calls[0].params == {"where": 'com_arm_name like "%Lyon%"', "limit": 2}

    @pytest.mark.asyncio
    async def test_overmatched_records_are_dropped(self) -> None:
        """Given records from other cities, when querying a city, then they are filtered out."""
        session = FakeSession(
            responses=[
                records_page(
                    [
                        station_record(1, "Lyon 3e Arrondissement"),
                        station_record(2, "Villeurbanne"),
                        station_record(3, "LYON"),
                    ]
                )
            ]
        )

        stations = await make_repository(session).fetch_by_city("lyon")

        assert [s.id for s in stations] == ["1", "3"]

    @pytest.mark.parametrize("query", ["ville", "Inconnue"])
    @pytest.mark.asyncio
    async def test_records_without_city_never_match(self, query: str) -> None:
        """Given a null city, when querying part of the placeholder, then nothing matches."""
        record = station_record(1, "Lyon")
        record["com_arm_name"] = None
        session = FakeSession(responses=[records_page([record], total_count=1)])

        assert await make_repository(session).fetch_by_city(query) == []

    @pytest.mark.asyncio
    async def test_when_primary_fails_then_fallback_is_tried_once(self) -> None:
        session = FakeSession(
            responses=[
                FakeResponse(status=502, body="Bad Gateway"),
                records_page([station_record(7, "Lyon")]),
            ]
        )

        stations = await make_repository(session).fetch_by_city("Lyon")

        assert [s.id for s in stations] == ["7"]
        assert [call.url for call in session.calls] == [PRIMARY_URL, FALLBACK_URL]
        assert session.calls[1].params == session.calls[0].params

    @pytest.mark.asyncio
    async def test_when_both_endpoints_fail_then_empty_list(self) -> None:
        session = FakeSession(
            responses=[
                FakeResponse(error=aiohttp.ClientConnectionError("down")),
                FakeResponse(body=""),
            ]
        )

        stations = await make_repository(session).fetch_by_city("Lyon")

        assert stations == []
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_when_no_fallback_configured_then_single_attempt(self) -> None:
        session = FakeSession(responses=[FakeResponse(status=500, body="oops")])
        repository = OpendatasoftStationRepository(
            session,  # type: ignore[arg-type]
            records_url=PRIMARY_URL,
            fallback_url=None,
        )

        assert await repository.fetch_by_city("Lyon") == []
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_when_primary_returns_no_match_then_fallback_is_not_used(self) -> None:
        """Given a successful but empty answer, when querying, then it is not a failure."""
        session = FakeSession(responses=[records_page([], total_count=0)])

        assert await make_repository(session).fetch_by_city("Nowhere") == []
        assert len(session.calls) == 1


def test_where_clause_escapes_quotes() -> None:
    assert city_where_clause('Saint "Jean"') == 'com_arm_name like "%Saint \\"Jean\\"%"'
