"""Language definitions: file extensions, lexer settings and style mappings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import yaml

DEFAULT_LANGUAGE = "text"


def _scalar_str(value: Any, what: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{what} must be a scalar, not {value!r}")


def _scalar_int(value: Any, what: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"{what} must be an integer, not {value!r}")


def _mapping(value: Any, what: str) -> Mapping[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be a mapping")
    return value


@dataclass
class LanguageSpec:
    """Everything a language file says about lexing, comments and styles.

    ``identifiers`` and ``substyles`` go by lexer class id; their entries are
    matched up by position.
    """

    lexer: str
    properties: Dict[str, str] = field(default_factory=dict)
    keywords: Dict[int, str] = field(default_factory=dict)
    identifiers: Dict[int, List[str]] = field(default_factory=dict)
    line_comment: Optional[str] = None
    block_comment: Optional[Tuple[str, str]] = None
    styles: Dict[int, int] = field(default_factory=dict)
    substyles: Dict[int, List[int]] = field(default_factory=dict)

    def style_mapping(self, substyle_starts: Mapping[int, int]) -> Dict[int, int]:
        """Lexer style id -> theme style id, substyles included.

        ``substyle_starts`` gives the first id allocated for each lexer
        class's substyles; the n-th substyle gets ``start + n``. A class
        without a start counts from 0. Plain styles are never overridden.
        """
        mapping = dict(self.styles)
        for lexer_class, style_ids in self.substyles.items():
            start = substyle_starts.get(lexer_class, 0)
            for offset, style_id in enumerate(style_ids):
                mapping.setdefault(start + offset, style_id)
        return mapping

    def _merged_with(self, newer: "LanguageSpec") -> "LanguageSpec":
        return LanguageSpec(
            lexer=newer.lexer,
            properties={**self.properties, **newer.properties},
            keywords={**self.keywords, **newer.keywords},
            identifiers={**self.identifiers, **newer.identifiers},
            line_comment=newer.line_comment if newer.line_comment is not None else self.line_comment,
            block_comment=newer.block_comment if newer.block_comment is not None else self.block_comment,
            styles={**self.styles, **newer.styles},
            substyles={**self.substyles, **newer.substyles},
        )


def parse_language_spec(data: Any) -> LanguageSpec:
    """Build a LanguageSpec from a parsed language file.

    Raises ValueError when the lexer is missing or a section is malformed.
    """
    if not isinstance(data, Mapping) or data.get("lexer") is None:
        raise ValueError("language file must name a lexer")
    spec = LanguageSpec(lexer=_scalar_str(data["lexer"], "lexer"))

    for name, value in _mapping(data.get("properties"), "properties").items():
        spec.properties[_scalar_str(name, "property name")] = _scalar_str(value, "property value")

    for index, words in _mapping(data.get("keywords"), "keywords").items():
        spec.keywords[_scalar_int(index, "keyword set")] = _scalar_str(words, "keywords")

    identifiers = data.get("identifiers")
    if isinstance(identifiers, Mapping):
        for lexer_class, names in identifiers.items():
            if not isinstance(names, list):
                continue
            spec.identifiers[_scalar_int(lexer_class, "lexer class")] = [
                _scalar_str(name, "identifiers") for name in names
            ]

    comments = data.get("comments")
    if comments:
        comments = _mapping(comments, "comments")
        if comments.get("line") is not None:
            spec.line_comment = _scalar_str(comments["line"], "line comment")
        block = comments.get("block")
        if isinstance(block, list):
            if len(block) < 2:
                raise ValueError("block comment needs an opening and a closing token")
            spec.block_comment = (
                _scalar_str(block[0], "block comment"),
                _scalar_str(block[1], "block comment"),
            )

    if data.get("styles") is not None:
        for lexer_id, style_id in _mapping(data["styles"], "styles").items():
            spec.styles[_scalar_int(lexer_id, "lexer style")] = _scalar_int(style_id, "style id")

    substyles = data.get("substyles")
    if isinstance(substyles, Mapping):
        for lexer_class, style_ids in substyles.items():
            if not isinstance(style_ids, list):
                continue
            spec.substyles[_scalar_int(lexer_class, "lexer class")] = [
                _scalar_int(style_id, "style id") for style_id in style_ids
            ]
    return spec


def _read_yaml(path: Path) -> Optional[Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return None
    return yaml.safe_load(text)


class Languages:
    """Known languages, their menu names and the extensions that select them."""

    def __init__(self) -> None:
        self.languages: List[str] = []
        self.menu_items: Dict[str, str] = {}
        self.extensions: Dict[str, str] = {}

    def load(self, data_dirs: Iterable["str | os.PathLike[str]"]) -> None:
        """Read ``<dir>/languages.yaml`` from each directory, general to specific.

        Later directories override extensions and menu names; missing files
        are skipped.
        """
        for directory in data_dirs:
            data = _read_yaml(Path(directory) / "languages.yaml")
            for key, entry in _mapping(data, "languages").items():
                name = _scalar_str(key, "language name")
                if not isinstance(entry, Mapping) or entry.get("name") is None:
                    raise ValueError(f"language {name!r} needs a menu name")
                menu_item = _scalar_str(entry["name"], "menu name")
                extensions = entry.get("extensions")
                if not isinstance(extensions, list):
                    raise ValueError(f"language {name!r} needs a list of extensions")
                for extension in extensions:
                    self.extensions[_scalar_str(extension, "extension")] = name
                if name not in self.languages:
                    self.languages.append(name)
                self.menu_items[name] = menu_item

    def language_for_extension(self, ext: str) -> Optional[str]:
        """The language for a file extension, or None (callers fall back to ``DEFAULT_LANGUAGE``)."""
        return self.extensions.get(ext)

    def sort_alphabetically(self) -> None:
        self.languages.sort()

    def menu_item_name(self, lang: str) -> str:
        """The menu label of a language, or "" when unknown."""
        return self.menu_items.get(lang, "")

    def load_spec(self, lang: str, data_dirs: Iterable["str | os.PathLike[str]"]) -> Optional[LanguageSpec]:
        """Read ``<dir>/languages/<lang>.yaml`` everywhere and merge, later files winning.

        Returns None when no directory has the file.
        """
        merged: Optional[LanguageSpec] = None
        for directory in data_dirs:
            path = Path(directory) / "languages" / f"{lang}.yaml"
            if not path.is_file():
                continue
            data = _read_yaml(path)
            if data is None and not path.exists():
                continue
            spec = parse_language_spec(data)
            merged = spec if merged is None else merged._merged_with(spec)
        return merged

    def __len__(self) -> int:
        return len(self.languages)

    def __getitem__(self, index: int) -> str:
        return self.languages[index]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.languages))