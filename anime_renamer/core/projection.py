"""Builds the script environment from the invocation entities.

Field names here are what user scripts read and write; keep them stable.
"""

from typing import Any, Callable, Dict, List, Optional

from .episodes import episode_numbers, representative_episode
from .paths import is_path_prefix
from ..models.types import (
    AnimeInfo, EpisodeInfo, FileInfo, GroupInfo, ImportFolder, RenameInvocation, Title,
    EPISODE_PREFIX,
)
from ..utils.helpers import date_table, track_language

# Marks import folder tables handed to scripts as destination references
IMPORT_FOLDER_CLASSID = "55138454-4A0D-45EB-8CCE-1CCF00220165"

TITLE_PRIORITY = {"Main": 0, "Official": 1, "Synonym": 2, "Short": 3, "None": 4}
OFFICIAL_TITLE_TYPES = ("Main", "Official", "None")


def best_title(titles: List[Title], language: str, allow_unofficial: bool = False) -> Optional[str]:
    """Best title in `language`: main, then official, synonym, short, none.

    Unless `allow_unofficial` is set only main, official and untyped titles
    qualify. Ties keep the order of `titles`.
    """
    ranked = sorted(
        (t for t in titles if t["language"] == language),
        key=lambda t: TITLE_PRIORITY.get(t["type"], len(TITLE_PRIORITY)),
    )
    if not allow_unofficial:
        ranked = [t for t in ranked if t["type"] in OFFICIAL_TITLE_TYPES]
    return ranked[0]["name"] if ranked else None


def _getname(titles: List[Title]) -> Callable:
    def getname(self, language, allow_unofficial=False):
        return best_title(titles, language, bool(allow_unofficial))
    return getname


def _titles(titles: List[Title]) -> List[Dict[str, Any]]:
    return [
        {"name": t["name"], "language": t["language"], "languagecode": t["language_code"], "type": t["type"]}
        for t in titles
    ]


def project_anime(a: AnimeInfo) -> Dict[str, Any]:
    c = a["episode_counts"]
    return {
        "id": a["id"],
        "type": a["type"],
        "rating": a["rating"],
        "restricted": a["restricted"],
        "airdate": date_table(a["air_date"]),
        "enddate": date_table(a["end_date"]),
        "preferredname": a["preferred_title"],
        "titles": _titles(a["titles"]),
        "getname": _getname(a["titles"]),
        "episodecounts": {
            "Episode": c["episodes"],
            "Special": c["specials"],
            "Credits": c["credits"],
            "Trailer": c["trailers"],
            "Other": c["others"],
            "Parody": c["parodies"],
        },
    }


def project_episode(e: EpisodeInfo) -> Dict[str, Any]:
    return {
        "id": e["id"],
        "animeid": e["anime_id"],
        "number": e["number"],
        "type": e["type"],
        "duration": e["duration"],
        "airdate": date_table(e["air_date"]),
        "titles": _titles(e["titles"]),
        "getname": _getname(e["titles"]),
        "prefix": EPISODE_PREFIX.get(e["type"], ""),
    }


def project_group(g: GroupInfo) -> Dict[str, Any]:
    # Only ids for now; expand if scripts ever need the series themselves
    return {"name": g["name"], "mainseriesid": g["main_series_id"], "seriesids": list(g["series_ids"])}


def project_import_folders(folders: List[ImportFolder]) -> List[Dict[str, Any]]:
    return [
        {
            "name": f["name"],
            "location": f["location"],
            "type": f["drop_type"],
            "_classid": IMPORT_FOLDER_CLASSID,
            "_index": i,
        }
        for i, f in enumerate(folders)
    ]


def _project_anidb(file: FileInfo) -> Optional[Dict[str, Any]]:
    a = file["anidb"]
    if a is None:
        return None
    rg = a["release_group"]
    return {
        "id": a["id"],
        "censored": a["censored"],
        "source": a["source"],
        "version": a["version"],
        "releasedate": date_table(a["release_date"]),
        "releasegroup": None if rg is None or rg["name"] == "raw/unknown"
        else {"name": rg["name"], "shortname": rg["short_name"]},
        "media": {
            "videocodec": a["media"]["video_codec"],
            "sublanguages": list(a["media"]["sub_languages"]),
            "dublanguages": list(a["media"]["dub_languages"]),
        },
    }


def _channels(track) -> float:
    if "LFE" in (track["channel_layout"] or ""):
        return track["channels"] - 1 + 0.1
    return track["channels"]


def _project_media(file: FileInfo) -> Optional[Dict[str, Any]]:
    m = file["media"]
    if m is None:
        return None
    v = m["video"]
    return {
        "chaptered": m["chaptered"],
        "duration": m["duration"],
        "bitrate": m["bitrate"],
        "video": None if v is None else {
            "height": v["height"],
            "width": v["width"],
            "codec": v["codec"],
            "res": v["res"],
            "bitrate": v["bitrate"],
            "bitdepth": v["bitdepth"],
            "framerate": v["framerate"],
        },
        "sublanguages": [track_language(s["language"], s["title"]) for s in m["subs"]],
        "audio": [
            {
                "compressionmode": a["compression_mode"],
                "channels": _channels(a),
                "samplingrate": a["sampling_rate"],
                "codec": a["codec"],
                "language": track_language(a["language"], a["title"]),
                "title": a["title"],
            }
            for a in m["audio"]
        ],
    }


def project_file(file: FileInfo, importfolders: List[Dict[str, Any]]) -> Dict[str, Any]:
    h = file["hashes"]
    return {
        "name": file["filename"],
        "path": file["path"],
        "size": file["size"],
        "hashes": {"crc": h["crc"], "md5": h["md5"], "ed2k": h["ed2k"], "sha1": h["sha1"]},
        "anidb": _project_anidb(file),
        "media": _project_media(file),
        "importfolder": next((f for f in importfolders if is_path_prefix(f["location"], file["path"])), None),
    }


def build_env(
    inv: RenameInvocation,
    folders: List[ImportFolder],
    log: Callable[[str], None],
    logwarn: Callable[[str], None],
    logerror: Callable[[str], None],
) -> Dict[str, Any]:
    """Script bindings for one invocation: defaults, read-only data and helpers."""
    animes = [project_anime(a) for a in inv["animes"]]
    primary_id = inv["animes"][0]["id"]
    episodes = [project_episode(e) for e in inv["episodes"]]
    rep = representative_episode(inv["episodes"], primary_id)
    groups = [project_group(g) for g in inv["groups"]]
    importfolders = project_import_folders(folders)

    def _episode_numbers(pad=0):
        return episode_numbers(inv["episodes"], primary_id, int(pad or 0))

    return {
        "filename": None,
        "destination": None,
        "subfolder": None,
        "replace_illegal_chars": False,
        "remove_illegal_chars": False,
        "use_existing_anime_location": False,
        "animes": animes,
        "anime": animes[0],
        "episodes": episodes,
        "episode": episodes[inv["episodes"].index(rep)] if rep is not None else None,
        "groups": groups,
        "group": groups[0] if groups else None,
        "file": project_file(inv["file"], importfolders),
        "importfolders": importfolders,
        "episode_numbers": _episode_numbers,
        "log": lambda msg="": log(str(msg)),
        "logwarn": lambda msg="": logwarn(str(msg)),
        "logerror": lambda msg="": logerror(str(msg)),
    }
