from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional

import pygame

from camera import update_camera
from config_io import load_game_config
from events import Event, EventType
from game_types import GameStatus
from highscore import JsonFileStore, KeyValueStore, MemoryStore
from input_adapter import Intent, IntentKind, intents_from_events
from rendering import GameRenderer
from simulation import Simulation
from sound import SoundCues
from utils import as_color, deep_get

logger = logging.getLogger(__name__)

DEFAULT_HIGH_SCORE_FILE = "~/.cipher-road/highscore.json"


class Game:
    """Top-level game orchestration (config, loop, input, render)."""

    def __init__(self, cfg_path: Path, seed: Optional[int] = None) -> None:
        self.raw_cfg, self.cfg = load_game_config(cfg_path)
        self.fps = int(deep_get(self.raw_cfg, "window.fps", 60))

        self.sim = Simulation(
            self.cfg,
            store=self._create_store(),
            rng=random.Random(seed),
        )
        self.sim.events.subscribe(EventType.GAME_OVER, self._on_game_over)

        self._init_pygame()
        self.renderer = GameRenderer(
            self.window_w,
            self.window_h,
            as_color(deep_get(self.raw_cfg, "window.bg", [18, 20, 28]), (18, 20, 28)),
        )
        self._init_sound()
        self.camera = pygame.Vector2(0, 0)
        self._shake_rng = random.Random()

    # ----------------------------
    # Initialization
    # ----------------------------

    def _create_store(self) -> KeyValueStore:
        """Pick the high-score store; persistence can be switched off in config."""
        if not bool(deep_get(self.raw_cfg, "persistence.enabled", True)):
            return MemoryStore()
        raw_path = str(deep_get(self.raw_cfg, "persistence.file", DEFAULT_HIGH_SCORE_FILE))
        return JsonFileStore(Path(raw_path).expanduser())

    def _init_pygame(self) -> None:
        """Initialize pygame and create window + clock."""
        pygame.init()
        self.window_w = int(deep_get(self.raw_cfg, "window.width", 800))
        self.window_h = int(deep_get(self.raw_cfg, "window.height", 700))
        self.title = str(deep_get(self.raw_cfg, "window.title", "Cipher Road"))
        flags = pygame.FULLSCREEN if bool(deep_get(self.raw_cfg, "window.fullscreen", False)) else 0
        self.screen = pygame.display.set_mode((self.window_w, self.window_h), flags)
        # Capture the actual size in case the platform adjusted it.
        self.window_w, self.window_h = self.screen.get_size()
        pygame.display.set_caption(self.title)
        self.clock = pygame.time.Clock()

    def _init_sound(self) -> None:
        if not bool(deep_get(self.raw_cfg, "sound.enabled", True)):
            return
        cues = deep_get(self.raw_cfg, "sound.cues", None)
        self.sound = SoundCues(
            Path(deep_get(self.raw_cfg, "sound.dir", "sounds")),
            cues if isinstance(cues, dict) else None,
            float(deep_get(self.raw_cfg, "sound.volume", 0.5)),
        )
        self.sound.attach(self.sim.events)

    def _on_game_over(self, event: Event) -> None:
        logger.info("final score %s (best %s)", event.payload.get("score"), event.payload.get("high_score"))

    # ----------------------------
    # Events / loop
    # ----------------------------

    def _tick_dt(self) -> float:
        """Return delta time in seconds with an FPS cap."""
        return self.clock.tick(self.fps) / 1000.0

    def _handle_intent(self, intent: Intent) -> bool:
        """Apply one intent to the simulation.

        Returns:
            False if the game should exit, True otherwise.
        """
        if intent.kind == IntentKind.QUIT:
            return False
        if intent.kind == IntentKind.MOVE and intent.direction is not None:
            self.sim.enqueue_move(intent.direction)
        elif intent.kind == IntentKind.PAUSE:
            self.sim.toggle_pause()
        elif intent.kind == IntentKind.RESET and self.sim.status == GameStatus.OVER:
            self.sim.reset()
        return True

    def _handle_events(self) -> bool:
        """Process pygame events.

        Returns:
            False if the game should exit, True otherwise.
        """
        for intent in intents_from_events(pygame.event.get()):
            if not self._handle_intent(intent):
                return False
        return True

    def update(self, dt: float) -> None:
        """Update one simulation step."""
        self.sim.tick(dt)
        snap = self.sim.snapshot()
        update_camera(
            self.camera,
            snap.player_x,
            snap.player_y,
            self.cfg.board.tile_size,
            shake=snap.camera_shake,
            rng=self._shake_rng,
        )

    def run(self) -> None:
        """Run the main game loop."""
        running = True
        while running:
            dt = self._tick_dt()
            running = self._handle_events()
            self.update(dt)
            self.renderer.render_frame(self.screen, self.sim, self.camera)

        pygame.quit()
