"""Desktop-entry discovery and parsing (freedesktop ``*.desktop`` files)."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Tuple

from lancea.text import norm
from lancea.utils.logger_util import get_logger, logging

logger = get_logger(__name__, logging.INFO)

DESKTOP_SECTION = "Desktop Entry"


@dataclass(frozen=True)
class AppRecord:
    desktop_id: str
    name: str
    desktop_path: Path
    generic_name: Optional[str] = None
    comment: Optional[str] = None
    exec: Optional[str] = None
    icon: Optional[str] = None
    categories: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    nodisplay: bool = False
    search_blob: str = field(default="", compare=False)

    @property
    def title(self) -> str:
        return self.name

    @property
    def subtitle(self) -> Optional[str]:
        return self.generic_name or self.comment


def application_dirs(env: Mapping[str, str] | None = None) -> List[Path]:
    """Return existing ``applications`` directories, user data dir first in the XDG order.

    The result is sorted and deduplicated.
    """
    env = os.environ if env is None else env
    dirs: List[Path] = []

    data_home = env.get("XDG_DATA_HOME") or str(Path(env.get("HOME", str(Path.home()))) / ".local" / "share")
    dirs.append(Path(data_home) / "applications")

    system = env.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    for base in system.split(os.pathsep):
        if base:
            dirs.append(Path(base) / "applications")

    return sorted({d for d in dirs if d.is_dir()})


def iter_desktop_files(dirs: List[Path]) -> Iterator[Path]:
    for d in dirs:
        # sorted walk so the first record for a desktop id is deterministic
        for root, subdirs, files in os.walk(d):
            subdirs.sort()
            for name in sorted(files):
                if name.endswith(".desktop"):
                    yield Path(root) / name


def desktop_id_from_path(path: Path) -> str:
    name = path.name
    return name[: -len(".desktop")] if name.endswith(".desktop") else name


def _locale_keys(key: str, lang: str | None) -> List[str]:
    # LANG=en_US.UTF-8 -> Name[en_US], Name[en], Name
    keys = [key]
    main = (lang or "").split(".")[0].split("@")[0]
    if main and main not in ("C", "POSIX"):
        short = main.split("_")[0]
        if short and short != main:
            keys.insert(0, f"{key}[{short}]")
        keys.insert(0, f"{key}[{main}]")
    return keys


def get_best_locale(section: Mapping[str, str], key: str, lang: str | None = None) -> Optional[str]:
    for k in _locale_keys(key, lang if lang is not None else os.environ.get("LANG")):
        v = section.get(k)
        if v is not None:
            return v
    return None


def _split_list(v: Optional[str]) -> Tuple[str, ...]:
    if not v:
        return ()
    return tuple(t for t in v.split(";") if t)


def _truthy(v: Optional[str]) -> bool:
    return (v or "").strip().lower() in ("true", "1")


def build_search_blob(*parts) -> str:
    out = []
    for p in parts:
        if isinstance(p, (tuple, list)):
            out.extend(norm(x) for x in p)
        else:
            out.append(norm(p))
    return " ".join(x for x in out if x)


def parse_desktop_text(text: str, path: Path, lang: str | None = None) -> Optional[AppRecord]:
    """Parse desktop-entry text; None when it is not a visible application.

    Raises ``configparser.Error`` on malformed input.
    """
    # desktop entries are case-sensitive and use '=' only; no interpolation
    cp = configparser.RawConfigParser(delimiters=("=",), comment_prefixes=("#",), strict=False, interpolation=None)
    cp.optionxform = str
    cp.read_string(text, source=str(path))
    if not cp.has_section(DESKTOP_SECTION):
        return None
    sec = dict(cp.items(DESKTOP_SECTION))

    if get_best_locale(sec, "Type", lang) != "Application":
        return None
    nodisplay = _truthy(get_best_locale(sec, "NoDisplay", lang))
    if nodisplay:
        return None

    desktop_id = desktop_id_from_path(path)
    name = get_best_locale(sec, "Name", lang) or desktop_id
    generic = get_best_locale(sec, "GenericName", lang)
    comment = get_best_locale(sec, "Comment", lang)
    categories = _split_list(get_best_locale(sec, "Categories", lang))
    keywords = _split_list(get_best_locale(sec, "Keywords", lang))

    return AppRecord(
        desktop_id=desktop_id,
        name=name,
        desktop_path=path,
        generic_name=generic,
        comment=comment,
        exec=get_best_locale(sec, "Exec", lang),
        icon=get_best_locale(sec, "Icon", lang),
        categories=categories,
        keywords=keywords,
        nodisplay=nodisplay,
        search_blob=build_search_blob(name, generic, comment, keywords, categories),
    )


def parse_desktop_file(path: Path, lang: str | None = None) -> Optional[AppRecord]:
    raw = path.read_bytes()
    return parse_desktop_text(raw.decode("utf-8", errors="replace"), path, lang)
