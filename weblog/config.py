from __future__ import annotations

import configparser
import dataclasses
import json
import sys
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .utils import parse_bool, parse_int

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

DEFAULT_LINE_WIDTH = 72
DEFAULT_PREFIX_LENGTH = 3
DEFAULT_WEBLOG_DIR = "weblog"
DEFAULT_DOMAIN = "localhost"

SHOW_URLS_FULL = "Full"
SHOW_URLS_SHORT = "Short"


def _load_ini(text: str) -> dict:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str
    parser.read_string(text)
    data = dict(parser["Weblog"]) if parser.has_section("Weblog") else {}
    if parser.has_section("Rewrites"):
        data["rewrites"] = dict(parser["Rewrites"])
    return data


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix == ".ini":
        try:
            return _load_ini(text)
        except configparser.Error as exc:
            print(f"Invalid INI in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def parse_show_urls(value: object) -> str:
    """Normalize the ``show_urls`` setting to ``"Full"``, ``"Short"`` or ``""``."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "full":
            return SHOW_URLS_FULL
        if lowered in {"short", "relative"}:
            return SHOW_URLS_SHORT
    return SHOW_URLS_SHORT if parse_bool(value) else ""


def unescape_newlines(text: str) -> str:
    return text.replace("\\n", "\n")


@dataclasses.dataclass(frozen=True)
class WeblogConfig:
    line_width: int = DEFAULT_LINE_WIDTH
    prefix_length: int = DEFAULT_PREFIX_LENGTH
    weblog_dir: Path = Path(DEFAULT_WEBLOG_DIR)
    domain: str = DEFAULT_DOMAIN
    url: str = f"http://{DEFAULT_DOMAIN}"
    show_powered_by: bool = True
    show_urls: str = SHOW_URLS_FULL
    show_category: bool = True
    show_date: bool = True
    show_copyright: bool = True
    show_separator: bool = False
    author_name: str = ""
    author_email: str = ""
    about_text: str = ""
    about_text_alt: str = ""
    rewrites: Mapping[str, str] = dataclasses.field(default_factory=lambda: MappingProxyType({}))
    mobile: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping, base_dir: Path | None = None) -> "WeblogConfig":
        """Build a config from a loaded config file, filling in defaults.

        Relative ``weblog_dir`` values are resolved against ``base_dir``
        (normally the directory holding the config file).
        """
        def value(key: str, default: object) -> object:
            found = data.get(key)
            return default if found is None else found

        weblog_dir = Path(str(value("weblog_dir", DEFAULT_WEBLOG_DIR)))
        if base_dir is not None and not weblog_dir.is_absolute():
            weblog_dir = base_dir / weblog_dir
        domain = str(value("domain", DEFAULT_DOMAIN)).strip().rstrip("/") or DEFAULT_DOMAIN
        scheme = "https" if parse_bool(data.get("https")) else "http"
        rewrites = data.get("rewrites") or {}
        return cls(
            line_width=parse_int(data.get("line_width"), DEFAULT_LINE_WIDTH),
            prefix_length=parse_int(data.get("prefix_length"), DEFAULT_PREFIX_LENGTH),
            weblog_dir=weblog_dir,
            domain=domain,
            url=f"{scheme}://{domain}",
            show_powered_by=parse_bool(value("show_powered_by", True)),
            show_urls=parse_show_urls(value("show_urls", SHOW_URLS_FULL)),
            show_category=parse_bool(value("show_category", True)),
            show_date=parse_bool(value("show_date", True)),
            show_copyright=parse_bool(value("show_copyright", True)),
            show_separator=parse_bool(value("show_separator", False)),
            author_name=str(value("author_name", "")),
            author_email=str(value("author_email", "")),
            about_text=unescape_newlines(str(value("about_text", ""))),
            about_text_alt=unescape_newlines(str(value("about_text_alt", ""))),
            rewrites=MappingProxyType({str(k): str(v) for k, v in dict(rewrites).items()}),
        )

    @property
    def author(self) -> str:
        return self.author_email or self.author_name

    def for_request(self, url: str | None = None, mobile: bool = False) -> "WeblogConfig":
        """Return the config for one request.

        ``url`` replaces the base URL (scheme and host as seen by the
        request). Narrow clients get half the line width and lose the
        category, date, copyright and permalink columns.
        """
        changes: dict = {}
        if url:
            changes["url"] = url.rstrip("/")
        if mobile:
            changes.update(
                line_width=self.line_width // 2 - 1,
                show_category=False,
                show_date=False,
                show_copyright=False,
                show_urls="",
                mobile=True,
            )
            if self.about_text_alt:
                changes["about_text"] = self.about_text_alt
        return dataclasses.replace(self, **changes)
