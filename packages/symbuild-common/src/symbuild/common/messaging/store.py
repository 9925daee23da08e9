import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _flatten(prefix: str, data: Dict[str, Any], out: Dict[str, str]) -> None:
    for key, value in data.items():
        fqn = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            _flatten(fqn, value, out)
        else:
            out[fqn] = str(value)


class MessageStore:
    """
    Maps message ids (e.g. "build.run.start") to format templates.

    Unknown ids resolve to themselves so a missing asset never hides a message.
    """

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        self._templates: Dict[str, str] = dict(templates or {})

    def get(self, msg_id: str, **kwargs: Any) -> str:
        key = str(msg_id)
        template = self._templates.get(key)
        if template is None:
            return key
        return template.format_map(_KeepMissing(kwargs))

    def __contains__(self, msg_id: object) -> bool:
        return str(msg_id) in self._templates

    def update(self, templates: Dict[str, str]) -> None:
        self._templates.update(templates)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._templates)

    @classmethod
    def from_directory(cls, lang_dir: Path) -> "MessageStore":
        """
        Loads every *.json file in `lang_dir`. The file stem is the first
        segment of the id, nested objects add further segments.
        """
        templates: Dict[str, str] = {}
        if not lang_dir.is_dir():
            return cls(templates)

        for asset in sorted(lang_dir.glob("*.json")):
            try:
                data = json.loads(asset.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                log.warning(f"Could not load message asset {asset}: {e}")
                continue
            _flatten(asset.stem, data, templates)
        return cls(templates)
