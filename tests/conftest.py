import copy

import pytest

from anime_renamer.core.normalizers import norm_invocation
from anime_renamer.core.renamer import LuaRenamer, RenamerContext, ScriptLogger


BASE_PAYLOAD = {
    "script": {"type": "LuaRenamer", "script": "filename = anime.preferredname"},
    "file": {
        "filename": "[Group] Show - 01 [ABCD1234].mkv",
        "path": "/mnt/import/[Group] Show - 01 [ABCD1234].mkv",
        "size": 734003200,
        "hashes": {"crc": "abcd1234", "md5": "m", "ed2k": "e", "sha1": "s"},
        "anidb": {
            "id": 900,
            "source": "www",
            "version": 2,
            "release_date": "2020-04-03",
            "release_group": {"name": "Some Group", "short_name": "SG"},
            "media": {"video_codec": "H264/AVC", "sub_languages": ["English"], "dub_languages": ["Japanese"]},
        },
        "media": {
            "chaptered": True,
            "duration": 1440.5,
            "bitrate": 4000000,
            "video": {"height": 1080, "width": 1920, "codec": "h264", "res": "1080p", "bitdepth": 8},
            "audio": [
                {"channels": 6, "channel_layout": "L R C LFE Ls Rs", "codec": "AAC", "language": "japanese"},
                {"channels": 2, "codec": "AAC", "language": "und", "title": "English"},
            ],
            "subs": [{"language": "eng", "title": "English"}],
        },
    },
    "animes": [
        {
            "id": 100,
            "type": "TVSeries",
            "rating": 8.1,
            "air_date": "2020-04-03",
            "preferred_title": "Show: The Series",
            "titles": [
                {"name": "Show Synonym", "language": "English", "type": "Synonym"},
                {"name": "Show Official", "language": "English", "type": "Official"},
                {"name": "Shou", "language": "Romaji", "type": "Main"},
            ],
            "episode_counts": {"episodes": 12, "specials": 1},
        }
    ],
    "episodes": [
        {"id": 1001, "anime_id": 100, "number": 1, "type": "Episode",
         "titles": [{"name": "The Beginning", "language": "English", "type": "None"}]},
    ],
    "groups": [{"name": "Show", "main_series_id": 100, "series_ids": [100, 101]}],
    "import_folders": [
        {"id": 1, "name": "Import", "location": "/mnt/import", "drop_type": "Source"},
        {"id": 2, "name": "Anime", "location": "/mnt/anime", "drop_type": "Destination"},
        {"id": 3, "name": "Movies", "location": "/mnt/import/movies", "drop_type": "Both"},
        {"id": 4, "name": "Archive", "location": "/mnt/archive", "drop_type": "Excluded"},
    ],
}


class CountingLogger(ScriptLogger):
    def __init__(self):
        super().__init__()
        self.messages = []

    def info(self, message):
        self.messages.append(("info", message))

    def warning(self, message):
        self.messages.append(("warning", message))

    def error(self, message):
        self.messages.append(("error", message))


@pytest.fixture
def payload():
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def make_inv(payload):
    def make(script=None, **overrides):
        p = copy.deepcopy(payload)
        if script is not None:
            p["script"]["script"] = script
        p.update(overrides)
        return norm_invocation(p)
    return make


@pytest.fixture
def context():
    return RenamerContext()


@pytest.fixture
def script_log():
    return CountingLogger()


@pytest.fixture
def renamer(context, script_log):
    return LuaRenamer(script_logger=script_log, context=context)
