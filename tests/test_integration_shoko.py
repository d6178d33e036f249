import os

import pytest

from anime_renamer.core.settings import load_settings
from anime_renamer.core.shoko import ShokoClient

pytestmark = pytest.mark.integration

settings = load_settings()


@pytest.mark.skipif(
    not (settings.shoko_url and settings.shoko_apikey),
    reason="ANIME_RENAMER_SHOKO_URL / ANIME_RENAMER_SHOKO_APIKEY not set",
)
def test_live_import_folders():
    client = ShokoClient(settings.shoko_url, settings.shoko_apikey, timeout=settings.timeout)
    folders = client.list_all()
    assert isinstance(folders, list)
    for f in folders:
        assert f["drop_type"] in ("None", "Source", "Destination", "Both", "Excluded")
    if folders:
        assert client.location_by_id(folders[0]["id"])["location"] == folders[0]["location"]
    anime_id = os.getenv("ANIME_RENAMER_TEST_ANIME_ID")
    if anime_id:
        assert isinstance(client.placements_for(int(anime_id)), list)
