from datetime import datetime, timezone

import pytest
import requests

from anime_renamer.core import shoko
from anime_renamer.core.shoko import ShokoClient


class DummyResponse:
    def __init__(self, status_code=200, json_data=None):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}", response=self)


FOLDERS = [
    {"ID": 1, "Name": "Import", "Path": "/mnt/import", "DropFolderType": "Source"},
    {"ID": 2, "Name": "Anime", "Path": "/mnt/anime", "DropFolderType": "Destination"},
]

FILES = {
    "Total": 2,
    "List": [
        {
            "Hashes": {"CRC32": "AAAA0001"},
            "Updated": "2024-01-02T10:00:00",
            "Locations": [{"ImportFolderID": 2, "RelativePath": "Show/Show - 01.mkv"}],
        },
        {
            "Hashes": {"CRC32": "AAAA0002"},
            "Updated": "2024-01-03T10:00:00Z",
            "Locations": [
                {"ImportFolderID": 2, "RelativePath": "Show/Show - 02.mkv"},
                {"ImportFolderID": 1, "RelativePath": "dupes/Show - 02.mkv"},
            ],
        },
    ],
}


@pytest.fixture
def routes(monkeypatch):
    seen = []
    table = {
        "ImportFolder": DummyResponse(200, FOLDERS),
        "ImportFolder/2": DummyResponse(200, FOLDERS[1]),
        "ImportFolder/9": DummyResponse(404),
        "Series/AniDB/100/Series": DummyResponse(200, {"IDs": {"ID": 7, "AniDB": 100}}),
        "Series/AniDB/404/Series": DummyResponse(404),
        "Series/7/File": DummyResponse(200, FILES),
    }

    def fake_get(url, headers=None, params=None, timeout=None):
        path = url.split("/api/v3/", 1)[1]
        seen.append((path, headers, params, timeout))
        return table[path]

    monkeypatch.setattr(shoko, "http_get", fake_get)
    return seen


def test_list_all(routes):
    c = ShokoClient("http://shoko.local:8111/", "key", timeout=3)
    folders = c.list_all()
    assert [f["name"] for f in folders] == ["Import", "Anime"]
    assert folders[1] == {"id": 2, "name": "Anime", "location": "/mnt/anime", "drop_type": "Destination"}
    path, headers, params, timeout = routes[0]
    assert headers["apikey"] == "key"
    assert params is None
    assert timeout == 3


def test_location_by_id(routes):
    c = ShokoClient("http://shoko.local:8111", "key")
    assert c.location_by_id(2)["name"] == "Anime"
    assert c.location_by_id(9) is None


def test_placements_for(routes):
    c = ShokoClient("http://shoko.local:8111", "key")
    placements = c.placements_for(100)
    assert [p["path"] for p in placements] == [
        "Show/Show - 01.mkv", "Show/Show - 02.mkv", "dupes/Show - 02.mkv",
    ]
    assert placements[0]["crc"] == "AAAA0001"
    assert placements[0]["updated"] == datetime(2024, 1, 2, 10, tzinfo=timezone.utc)
    assert placements[2]["import_folder_id"] == 1
    assert routes[-1][2] == {"pageSize": 0}


def test_placements_for_unknown_anime(routes):
    assert ShokoClient("http://shoko.local:8111", "key").placements_for(404) == []
