"""Data normalization from JSON payloads and Shoko API responses."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models.types import (
    AnimeInfo, AniDBFileInfo, AudioTrack, EpisodeInfo, FileInfo, GroupInfo, ImportFolder,
    MediaInfo, Placement, RenameInvocation, Title,
)


def parse_date(v: Any) -> Optional[datetime]:
    if v is None or isinstance(v, datetime):
        return v
    if isinstance(v, (int, float)):
        return datetime.fromtimestamp(v)
    s = str(v).strip()
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def norm_title(t: Dict[str, Any]) -> Title:
    return {
        "name": t.get("name") or t.get("title") or "",
        "language": t.get("language") or "Unknown",
        "language_code": t.get("language_code"),
        "type": t.get("type") or "None",
    }


def norm_anime(a: Dict[str, Any]) -> AnimeInfo:
    c = a.get("episode_counts") or {}
    titles = [norm_title(t) for t in a.get("titles") or []]
    return {
        "id": int(a["id"]),
        "type": a.get("type") or "Other",
        "rating": a.get("rating"),
        "restricted": bool(a.get("restricted", False)),
        "air_date": parse_date(a.get("air_date")),
        "end_date": parse_date(a.get("end_date")),
        "titles": titles,
        "episode_counts": {
            "episodes": int(c.get("episodes", 0)),
            "specials": int(c.get("specials", 0)),
            "credits": int(c.get("credits", 0)),
            "trailers": int(c.get("trailers", 0)),
            "parodies": int(c.get("parodies", 0)),
            "others": int(c.get("others", 0)),
        },
        "preferred_title": a.get("preferred_title") or (titles[0]["name"] if titles else str(a["id"])),
    }


def norm_episode(e: Dict[str, Any]) -> EpisodeInfo:
    return {
        "id": int(e["id"]),
        "anime_id": int(e["anime_id"]),
        "number": int(e["number"]),
        "type": e.get("type") or "Episode",
        "duration": e.get("duration"),
        "air_date": parse_date(e.get("air_date")),
        "titles": [norm_title(t) for t in e.get("titles") or []],
    }


def norm_group(g: Dict[str, Any]) -> GroupInfo:
    return {
        "name": g.get("name") or "",
        "main_series_id": g.get("main_series_id"),
        "series_ids": [int(s) for s in g.get("series_ids") or []],
    }


def norm_audio(a: Dict[str, Any]) -> AudioTrack:
    return {
        "compression_mode": a.get("compression_mode"),
        "channels": int(a.get("channels") or 0),
        "channel_layout": a.get("channel_layout"),
        "sampling_rate": a.get("sampling_rate"),
        "codec": a.get("codec"),
        "language": a.get("language"),
        "title": a.get("title"),
    }


def norm_media(m: Optional[Dict[str, Any]]) -> Optional[MediaInfo]:
    if not m:
        return None
    v = m.get("video")
    return {
        "chaptered": bool(m.get("chaptered", False)),
        "duration": m.get("duration"),
        "bitrate": m.get("bitrate"),
        "video": None if not v else {
            "height": int(v.get("height") or 0),
            "width": int(v.get("width") or 0),
            "codec": v.get("codec"),
            "res": v.get("res"),
            "bitrate": v.get("bitrate"),
            "bitdepth": v.get("bitdepth"),
            "framerate": v.get("framerate"),
        },
        "audio": [norm_audio(a) for a in m.get("audio") or []],
        "subs": [{"language": s.get("language"), "title": s.get("title")} for s in m.get("subs") or []],
    }


def norm_anidb(d: Optional[Dict[str, Any]]) -> Optional[AniDBFileInfo]:
    if not d:
        return None
    rg = d.get("release_group")
    media = d.get("media") or {}
    return {
        "id": int(d["id"]),
        "censored": bool(d.get("censored", False)),
        "source": d.get("source"),
        "version": int(d.get("version") or 1),
        "release_date": parse_date(d.get("release_date")),
        "release_group": {"name": rg.get("name") or "", "short_name": rg.get("short_name")} if rg else None,
        "media": {
            "video_codec": media.get("video_codec"),
            "sub_languages": list(media.get("sub_languages") or []),
            "dub_languages": list(media.get("dub_languages") or []),
        },
    }


def norm_file(f: Dict[str, Any]) -> FileInfo:
    h = f.get("hashes") or {}
    return {
        "filename": f["filename"],
        "path": f["path"],
        "size": int(f.get("size") or 0),
        "hashes": {"crc": h.get("crc"), "md5": h.get("md5"), "ed2k": h.get("ed2k"), "sha1": h.get("sha1")},
        "anidb": norm_anidb(f.get("anidb")),
        "media": norm_media(f.get("media")),
    }


def norm_import_folder(d: Dict[str, Any]) -> ImportFolder:
    return {
        "id": int(d.get("id", 0)),
        "name": d.get("name") or "",
        "location": d.get("location") or "",
        "drop_type": d.get("drop_type") or "Source",
    }


def norm_invocation(p: Dict[str, Any]) -> RenameInvocation:
    """Typed invocation from a loose JSON object (as sent to the MCP tools)."""
    s = p.get("script") or {}
    return {
        "script": {"type": s.get("type") or "", "script": s.get("script") or ""},
        "file": norm_file(p["file"]),
        "animes": [norm_anime(a) for a in p.get("animes") or []],
        "episodes": [norm_episode(e) for e in p.get("episodes") or []],
        "groups": [norm_group(g) for g in p.get("groups") or []],
        "import_folders": [norm_import_folder(d) for d in p.get("import_folders") or []],
    }


# Shoko Server v3 API

def norm_import_folder_from_shoko(d: Dict[str, Any]) -> ImportFolder:
    return {
        "id": int(d.get("ID", 0)),
        "name": d.get("Name") or "",
        "location": d.get("Path") or "",
        "drop_type": d.get("DropFolderType") or "Source",
    }


def norm_placements_from_shoko(f: Dict[str, Any]) -> List[Placement]:
    hashes = f.get("Hashes") or {}
    crc = hashes.get("CRC32") if isinstance(hashes, dict) else None
    updated = parse_date(f.get("Updated")) or datetime.min
    if updated.tzinfo is None:
        updated = updated.replace(tzinfo=timezone.utc)
    return [
        {
            "crc": crc,
            "import_folder_id": int(loc.get("ImportFolderID", 0)),
            "path": loc.get("RelativePath") or "",
            "updated": updated,
        }
        for loc in f.get("Locations") or []
    ]
