import os
from pathlib import Path
from typing import Any

from .messaging import MessageBus, MessageStore

DEFAULT_LANG = "en"


def _detect_lang() -> str:
    # 1. Explicit override
    env_lang = os.getenv("SYMBUILD_LANG")
    if env_lang:
        return env_lang

    # 2. System LANG (e.g. "de_DE.UTF-8" -> "de")
    sys_lang = os.getenv("LANG")
    if sys_lang:
        base_lang = sys_lang.split(".")[0].split("_")[0]
        if base_lang:
            return base_lang

    return DEFAULT_LANG


def build_store(assets_root: Path, lang: str) -> MessageStore:
    # The default language is always loaded underneath, so a partial
    # translation falls back per message.
    store = MessageStore.from_directory(assets_root / DEFAULT_LANG)
    if lang != DEFAULT_LANG:
        localized = MessageStore.from_directory(assets_root / lang)
        store.update(localized.as_dict())
    return store


_assets_root = Path(__file__).parent / "assets"

# Global singleton. The CLI installs a renderer; library code only emits ids.
bus = MessageBus(store=build_store(_assets_root, _detect_lang()))


def symbuild_operator(msg_id: str, **kwargs: Any) -> str:
    """Resolves a message id to its final formatted string."""
    return bus.render_to_string(msg_id, **kwargs)


__all__ = ["bus", "symbuild_operator", "build_store"]
