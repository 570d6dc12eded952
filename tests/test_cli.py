"""Tests for the command-line front end."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from prix_carburants.application.station_filter import MSG_NO_MATCHING_STATIONS
from prix_carburants.cli import (
    EXIT_ERROR,
    EXIT_INVALID_INPUT,
    EXIT_NO_RESULTS,
    _setup_argparse,
    format_station_table,
    format_stations_json,
    main,
)
from prix_carburants.domain.models import QueryResult, ServiceFlags, Station


def make_station(station_id: str, city: str = "Lyon", brand: str = "Total") -> Station:
    return Station(
        id=station_id,
        address="12 avenue Félix Faure",
        city=city,
        postal_code="69003",
        fuel_types="Gazole, SP95",
        price_gazole=1.789,
        price_sp95=None,
        price_sp98=1.9,
        brand=brand,
        services=ServiceFlags(has_shop=True),
    )


@pytest.fixture
def workdir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run the CLI in an empty directory with favorites stored there."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FAVORITES_FILE", str(tmp_path / "favorites.json"))
    return tmp_path


@pytest.fixture
def service() -> AsyncMock:
    mock = AsyncMock()
    mock.fetch_stations_online.return_value = QueryResult.found(
        [make_station("1"), make_station("2", "Paris", "Esso")], "Aucune station trouvée."
    )
    return mock


def test_station_table_lists_one_row_per_station() -> None:
    table = format_station_table([make_station("1"), make_station("2", "Paris")])
    lines = table.splitlines()

    assert len(lines) == 4
    assert lines[0].startswith("ID")
    assert "Paris" in lines[3]
    assert "1.789" in lines[2]
    assert " - " in lines[2]


def test_station_json_includes_services() -> None:
    data = json.loads(format_stations_json([make_station("1")]))

    assert data[0]["id"] == "1"
    assert data[0]["price_sp95"] is None
    assert data[0]["services"] == {"has_toilets": False, "has_shop": True, "has_air_pump": False}


@pytest.mark.asyncio
async def test_all_command_prints_stations(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch("prix_carburants.cli.build_query_service", return_value=service):
        exit_code = await main(["all", "--json"])

    assert exit_code == 0
    assert [s["id"] for s in json.loads(capsys.readouterr().out)] == ["1", "2"]


@pytest.mark.asyncio
async def test_invalid_city_prints_message_and_exits_2(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    service.fetch_stations_by_city.return_value = QueryResult.invalid_input(
        "Veuillez entrer une ville."
    )

    with patch("prix_carburants.cli.build_query_service", return_value=service):
        exit_code = await main(["city", ""])

    assert exit_code == EXIT_INVALID_INPUT
    assert "Veuillez entrer une ville." in capsys.readouterr().err


@pytest.mark.asyncio
async def test_itinerary_without_results_exits_1(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    message = "Aucune station trouvée entre 'Paris' et 'Brest'."
    service.fetch_stations_by_itinerary.return_value = QueryResult.no_results(message)

    with patch("prix_carburants.cli.build_query_service", return_value=service):
        exit_code = await main(["itinerary", "Paris", "Brest"])

    assert exit_code == EXIT_NO_RESULTS
    service.fetch_stations_by_itinerary.assert_awaited_once_with("Paris", "Brest")
    assert message in capsys.readouterr().err


@pytest.mark.asyncio
async def test_favorites_add_list_remove(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch("prix_carburants.cli.build_query_service", return_value=service):
        assert await main(["favorites", "add", "2"]) == 0
        assert await main(["favorites", "add", "2"]) == EXIT_INVALID_INPUT
        capsys.readouterr()

        assert await main(["favorites", "list", "--json"]) == 0
        listed = json.loads(capsys.readouterr().out)

        assert await main(["favorites", "remove", "2"]) == 0
        assert await main(["favorites", "remove", "2"]) == EXIT_INVALID_INPUT

    assert [s["id"] for s in listed] == ["2"]
    assert json.loads((workdir / "favorites.json").read_text(encoding="utf-8")) == []


@pytest.mark.asyncio
async def test_favorites_list_when_empty_exits_1(workdir: Path, service: AsyncMock) -> None:
    with patch("prix_carburants.cli.build_query_service", return_value=service):
        assert await main(["favorites", "list"]) == EXIT_NO_RESULTS

    service.fetch_stations_online.assert_not_awaited()


@pytest.mark.asyncio
async def test_no_command_prints_help(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert await main([]) == EXIT_INVALID_INPUT
    assert "usage:" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_brand_filter_narrows_listed_stations(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch("prix_carburants.cli.build_query_service", return_value=service):
        exit_code = await main(["all", "--brand", "Autres", "--json"])

    assert exit_code == 0
    assert [s["id"] for s in json.loads(capsys.readouterr().out)] == ["2"]


@pytest.mark.asyncio
async def test_fuel_filter_without_match_exits_1(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    service.fetch_stations_by_city.return_value = QueryResult.found(
        [make_station("1")], "Aucune station trouvée pour la ville 'Lyon'."
    )

    with patch("prix_carburants.cli.build_query_service", return_value=service):
        exit_code = await main(["city", "Lyon", "--fuel", "E85"])

    assert exit_code == EXIT_NO_RESULTS
    assert MSG_NO_MATCHING_STATIONS in capsys.readouterr().err


@pytest.mark.asyncio
async def test_favorites_list_applies_brand_filter(
    workdir: Path, service: AsyncMock, capsys: pytest.CaptureFixture[str]
) -> None:
    with patch("prix_carburants.cli.build_query_service", return_value=service):
        await main(["favorites", "add", "1"])
        await main(["favorites", "add", "2"])
        capsys.readouterr()

        exit_code = await main(["favorites", "list", "--brand", "Total", "--json"])

    assert exit_code == 0
    assert [s["id"] for s in json.loads(capsys.readouterr().out)] == ["1"]


def test_unknown_brand_is_rejected(workdir: Path) -> None:
    with pytest.raises(SystemExit):
        _setup_argparse().parse_args(["all", "--brand", "Shell"])


@pytest.mark.asyncio
async def test_favorites_write_failure_prints_error(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    service: AsyncMock,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Given a favorites path under a regular file, when adding, then an error is printed."""
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FAVORITES_FILE", str(blocker / "favorites.json"))

    with patch("prix_carburants.cli.build_query_service", return_value=service):
        exit_code = await main(["favorites", "add", "1"])

    assert exit_code == EXIT_ERROR
    assert "Error saving favorites" in capsys.readouterr().err
