from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

import pygame

from events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

DEFAULT_CUES: Dict[str, str] = {
    EventType.MOVED.value: "move.wav",
    EventType.SCORE_INCREASED.value: "score.wav",
    EventType.GAME_OVER.value: "game_over.wav",
    EventType.PAUSED.value: "pause.wav",
}


class SoundCues:
    """Plays a short sound file for each subscribed game event.

    Missing files or an unavailable mixer just mean silence.
    """

    def __init__(
        self,
        sound_dir: Path,
        cues: Optional[Mapping[str, str]] = None,
        volume: float = 0.5,
    ) -> None:
        self.sound_dir = sound_dir
        self.volume = max(0.0, min(volume, 1.0))
        self.enabled = self._init_mixer()
        self.sounds: Dict[EventType, pygame.mixer.Sound] = {}
        if self.enabled:
            self._load(cues if cues is not None else DEFAULT_CUES)

    def _init_mixer(self) -> bool:
        """Initialize pygame mixer; return False if unavailable."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            return True
        except pygame.error as e:
            logger.warning("sound disabled, mixer unavailable: %s", e)
            return False

    def _resolve(self, raw: str) -> Optional[Path]:
        """Resolve a cue file name to a real file path."""
        raw_path = Path(raw)
        candidates = [raw_path] if raw_path.is_absolute() else [self.sound_dir / raw_path, raw_path]
        for c in candidates:
            if c.exists() and c.is_file():
                return c
        return None

    def _load(self, cues: Mapping[str, str]) -> None:
        for name, file_name in cues.items():
            try:
                event_type = EventType(name)
            except ValueError:
                logger.warning("unknown sound cue event %r", name)
                continue
            path = self._resolve(str(file_name))
            if path is None:
                logger.debug("no sound file for %s (%s)", name, file_name)
                continue
            try:
                sound = pygame.mixer.Sound(path.as_posix())
            except pygame.error as e:
                logger.warning("could not load %s: %s", path, e)
                continue
            sound.set_volume(self.volume)
            self.sounds[event_type] = sound

    def attach(self, bus: EventBus) -> None:
        for event_type in self.sounds:
            bus.subscribe(event_type, self.play)

    def play(self, event: Event) -> None:
        sound = self.sounds.get(event.type)
        if sound is not None:
            sound.play()
