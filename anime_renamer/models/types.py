"""Type definitions for anime-renamer."""

from datetime import datetime
from typing import TypedDict, Optional, List


# Enumerations exposed to scripts (member name == value)
ANIME_TYPES = ("Movie", "OVA", "TVSeries", "TVSpecial", "Web", "Other")
TITLE_TYPES = ("None", "Main", "Official", "Short", "Synonym", "TitleCard", "KanjiReading")
EPISODE_TYPES = ("Episode", "Credits", "Special", "Trailer", "Parody", "Other")
IMPORT_FOLDER_TYPES = ("Excluded", "Source", "Destination", "Both")
LANGUAGES = (
    "Unknown", "English", "Romaji", "Japanese", "Afrikaans", "Arabic", "Bangladeshi",
    "Bulgarian", "FrenchCanadian", "Czech", "Danish", "German", "Greek", "Spanish",
    "Estonian", "Finnish", "French", "Galician", "Hebrew", "Hungarian", "Italian",
    "Korean", "Lithuanian", "Mongolian", "Malaysian", "Dutch", "Norwegian", "Polish",
    "Portuguese", "BrazilianPortuguese", "Romanian", "Russian", "Slovak", "Slovenian",
    "Serbian", "Swedish", "Thai", "Turkish", "Ukrainian", "Vietnamese", "Chinese",
    "ChineseSimplified", "ChineseTraditional", "Pinyin", "Latin", "Albanian", "Basque",
    "Bengali", "Bosnian", "Catalan", "Croatian", "Hindi", "Icelandic", "Indonesian",
    "Tagalog", "Tamil", "Urdu", "Persian", "Georgian", "Kazakh", "Latvian", "Macedonian",
    "Sinhala", "Telugu", "Malayalam", "Kannada", "Marathi", "Nepali", "Esperanto",
)

# EpisodeType ordinal (1-based, Other is last)
EPISODE_TYPE_ORDER = {t: i + 1 for i, t in enumerate(EPISODE_TYPES)}

EPISODE_PREFIX = {
    "Episode": "",
    "Credits": "C",
    "Special": "S",
    "Trailer": "T",
    "Parody": "P",
    "Other": "O",
}


class Title(TypedDict):
    name: str
    language: str                  # one of LANGUAGES
    language_code: Optional[str]
    type: str                      # one of TITLE_TYPES


class EpisodeCounts(TypedDict):
    episodes: int
    specials: int
    credits: int
    trailers: int
    parodies: int
    others: int


class AnimeInfo(TypedDict):
    id: int
    type: str                      # one of ANIME_TYPES
    rating: Optional[float]
    restricted: bool
    air_date: Optional[datetime]
    end_date: Optional[datetime]
    titles: List[Title]
    episode_counts: EpisodeCounts
    preferred_title: str


class EpisodeInfo(TypedDict):
    id: int
    anime_id: int
    number: int
    type: str                      # one of EPISODE_TYPES
    duration: Optional[int]        # seconds
    air_date: Optional[datetime]
    titles: List[Title]


class GroupInfo(TypedDict):
    name: str
    main_series_id: Optional[int]
    series_ids: List[int]


class Hashes(TypedDict):
    crc: Optional[str]
    md5: Optional[str]
    ed2k: Optional[str]
    sha1: Optional[str]


class ReleaseGroup(TypedDict):
    name: str
    short_name: Optional[str]


class AniDBMedia(TypedDict):
    video_codec: Optional[str]
    sub_languages: List[str]
    dub_languages: List[str]


class AniDBFileInfo(TypedDict):
    id: int
    censored: bool
    source: Optional[str]
    version: int
    release_date: Optional[datetime]
    release_group: Optional[ReleaseGroup]
    media: AniDBMedia


class VideoTrack(TypedDict):
    height: int
    width: int
    codec: Optional[str]
    res: Optional[str]             # standardized resolution, e.g. "1080p"
    bitrate: Optional[int]
    bitdepth: Optional[int]
    framerate: Optional[float]


class AudioTrack(TypedDict):
    compression_mode: Optional[str]
    channels: int
    channel_layout: Optional[str]
    sampling_rate: Optional[int]
    codec: Optional[str]
    language: Optional[str]        # raw language name from the container
    title: Optional[str]


class SubtitleTrack(TypedDict):
    language: Optional[str]
    title: Optional[str]


class MediaInfo(TypedDict):
    chaptered: bool
    duration: Optional[float]
    bitrate: Optional[int]
    video: Optional[VideoTrack]
    audio: List[AudioTrack]
    subs: List[SubtitleTrack]


class FileInfo(TypedDict):
    filename: str
    path: str                      # full path on disk
    size: int
    hashes: Hashes
    anidb: Optional[AniDBFileInfo]
    media: Optional[MediaInfo]


class ImportFolder(TypedDict):
    id: int
    name: str
    location: str
    drop_type: str                 # one of IMPORT_FOLDER_TYPES


class Placement(TypedDict):
    crc: Optional[str]
    import_folder_id: int
    path: str                      # relative to the import folder
    updated: datetime


class ScriptInfo(TypedDict):
    type: str
    script: str


class RenameInvocation(TypedDict):
    script: ScriptInfo
    file: FileInfo
    animes: List[AnimeInfo]        # primary entry first
    episodes: List[EpisodeInfo]
    groups: List[GroupInfo]
    import_folders: List[ImportFolder]


def is_destination(folder: ImportFolder) -> bool:
    return folder["drop_type"] in ("Destination", "Both")


def is_excluded(folder: ImportFolder) -> bool:
    return folder["drop_type"] == "Excluded"
