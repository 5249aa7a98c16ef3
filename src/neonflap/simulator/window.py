"""
Desktop window for NEONFLAP using pygame.

Pumps input every display frame, hands frames to the game loop while it
is running, and draws the scene plus the menu, HUD and game over overlays.
"""

import asyncio
import datetime
import logging
from typing import List

import pygame

from neonflap.audio.engine import AudioEngine
from neonflap.core.events import Event, EventType
from neonflap.core.state import RunState
from neonflap.game.engine import FlapEngine
from neonflap.game.loop import GameLoop
from neonflap.graphics.primitives import new_buffer
from neonflap.graphics.renderer import DAY, NIGHT, is_night, render_scene
from neonflap.settings import Settings
from neonflap.storage.persistence import HighScore

logger = logging.getLogger(__name__)

TEXT_COLOR = (255, 255, 255)
SHADOW_COLOR = (30, 30, 30)
DIM_COLOR = (200, 200, 200)


def menu_hints(paused: bool, can_resume: bool) -> List[str]:
    """Key hints for the title and pause screens."""
    if paused:
        return ["P  continue", "H  menu"]
    hints = ["SPACE  new run"]
    if can_resume:
        hints.append("R  resume")
    return hints


class SimulatorWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP / click: Flap, or start a run from the menu
        P: Pause / resume
        R: Resume a stored run
        H: Back to menu (paused or game over)
        M: Mute audio
        ESC / Q: Quit (a run in progress is paused first, so it can be resumed)
    """

    def __init__(
        self,
        settings: Settings,
        engine: FlapEngine,
        loop: GameLoop,
        audio: AudioEngine | None = None,
    ) -> None:
        self.settings = settings
        self.engine = engine
        self.loop = loop
        self.audio = audio

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0

        self._buffer = new_buffer(settings.world.width, settings.world.height)
        self._palette = DAY

        # Fonts
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None

        # Menu data, refreshed on state changes
        self._can_resume = False
        self._high_scores: List[HighScore] = []

        engine.event_bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed)
        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.settings.display.title)
        self._screen = pygame.display.set_mode(self.settings.window_size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)
        self._big_font = pygame.font.SysFont(None, 72)

        self._refresh_menu()
        self._refresh_palette()
        logger.info(f"Pygame initialized: {self.settings.window_size}")

    def _refresh_menu(self) -> None:
        self._can_resume = self.engine.can_resume
        self._high_scores = self.engine.high_scores

    def _refresh_palette(self) -> None:
        night = is_night(datetime.datetime.now().hour, self.settings.display)
        self._palette = NIGHT if night else DAY

    def _on_state_changed(self, event: Event) -> None:
        self._refresh_menu()
        if event.data["to"] is RunState.PLAYING:
            self._refresh_palette()

    # Input
    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._action()

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key in (pygame.K_SPACE, pygame.K_UP, pygame.K_RETURN):
            self._action()
        elif key == pygame.K_p:
            if self.engine.state is RunState.PLAYING:
                self.engine.pause()
            else:
                self.engine.resume()
        elif key == pygame.K_r:
            self.engine.resume()
        elif key == pygame.K_h:
            self.engine.go_home()
        elif key == pygame.K_m and self.audio is not None:
            muted = self.audio.toggle_mute()
            logger.info(f"Audio {'muted' if muted else 'unmuted'}")

    def _action(self) -> None:
        """The one button: flap while playing, otherwise start a run."""
        if self.engine.state is RunState.PLAYING:
            self.engine.jump()
        elif self.engine.state in (RunState.IDLE, RunState.GAME_OVER):
            self.engine.start()

    def _quit(self) -> None:
        if self.engine.state is RunState.PLAYING:
            self.engine.pause()
        self._running = False

    # Rendering
    def _render(self) -> None:
        """Render scene and overlays."""
        if not self._screen:
            return

        state = self.engine.state
        render_scene(
            self._buffer,
            self.engine.run if state is not RunState.IDLE else None,
            self.settings.obstacles,
            particles=self.loop.effects.particles,
            show_avatar=state is not RunState.GAME_OVER,
            palette=self._palette,
        )

        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if self.settings.display.scale != 1:
            surface = pygame.transform.scale(surface, self.settings.window_size)
        self._screen.blit(surface, (0, 0))

        if state is RunState.PLAYING:
            self._blit_text(str(self.engine.score), 40, self._big_font)
        elif state is RunState.GAME_OVER:
            self._render_game_over()
        else:
            self._render_menu(paused=state is RunState.PAUSED)

        pygame.display.flip()

    def _render_menu(self, paused: bool) -> None:
        y = self._blit_text("PAUSED" if paused else self.settings.display.title, 80, self._big_font)
        y += 22
        for hint in menu_hints(paused, self._can_resume):
            y = self._blit_text(hint, y + 8)
        self._render_high_scores(y + 30)

    def _render_game_over(self) -> None:
        y = self._blit_text("GAME OVER", 80, self._big_font)
        y = self._blit_text(f"Score: {self.engine.score}", y + 20)
        y = self._blit_text("SPACE  again    H  menu", y + 20)
        self._render_high_scores(y + 30)

    def _render_high_scores(self, y: int) -> None:
        if not self._high_scores:
            self._blit_text("No scores yet", y, color=DIM_COLOR)
            return
        y = self._blit_text("HALL OF FAME", y)
        for rank, entry in enumerate(self._high_scores, start=1):
            y = self._blit_text(f"{rank}. {entry.score}   {entry.date}", y + 4, color=DIM_COLOR)

    def _blit_text(self, text: str, y: int, font: pygame.font.Font | None = None,
                   color: tuple[int, int, int] = TEXT_COLOR) -> int:
        """Draw centered text with a drop shadow. Returns the y below it."""
        font = font or self._font
        if not font or not self._screen:
            return y
        cx = self._screen.get_width() // 2
        shadow = font.render(text, True, SHADOW_COLOR)
        label = font.render(text, True, color)
        self._screen.blit(shadow, shadow.get_rect(midtop=(cx + 2, y + 2)))
        rect = label.get_rect(midtop=(cx, y))
        self._screen.blit(label, rect)
        return rect.bottom

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            if self.loop.running:
                self.loop.frame(float(pygame.time.get_ticks()))

            self._render()

            if self._clock:
                self._clock.tick(self.settings.display.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
