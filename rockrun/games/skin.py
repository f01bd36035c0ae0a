"""Base class for Rock Run skins.

Skins handle ALL rendering - the game only manages state. The base skin
draws what every game shares (ship, shots, particles, HUD, overlays and
toasts); game skins add the background and obstacles.
"""

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

import pygame

from models import GameEvent, HudSnapshot
from rockrun.games.input import Control
from rockrun.sim import Bullet, EnemyBullet, Obstacle, Particle, Ship

if TYPE_CHECKING:
    from rockrun.games.base_game import FrameSnapshot

Color = Tuple[int, int, int]


def fade(color: Color, t: float, background: Color = (7, 10, 18)) -> Color:
    """Blend color toward the background; t=1 is full color."""
    t = min(max(t, 0.0), 1.0)
    return tuple(int(b + (c - b) * t) for c, b in zip(color, background))  # type: ignore


class VectorSkin(ABC):
    """Line-art renderer for a frame snapshot."""

    NAME: str = "vector"
    DESCRIPTION: str = "Base vector skin"

    BACKGROUND: Color = (7, 10, 18)
    LINE_COLOR: Color = (232, 237, 246)
    ACCENT_COLOR: Color = (125, 211, 252)
    ENEMY_SHOT_COLOR: Color = (251, 146, 60)
    HUD_COLOR: Color = (232, 237, 246)
    DIM_COLOR: Color = (120, 130, 150)

    TOAST_SECONDS: float = 1.6
    MAX_TOASTS: int = 3

    TITLE: str = "ROCK RUN"
    HELP_LINES: Tuple[str, ...] = (
        "Arrows / WASD to fly, Space to fire",
        "P pause, R restart",
        "Press Enter or tap to start",
    )

    def __init__(self):
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None
        self._clock = 0.0
        self._toasts: List[List] = []  # [message, seconds_left]

    def _ensure_font(self) -> None:
        """Ensure fonts are initialized."""
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, 28)
            self._big_font = pygame.font.Font(None, 64)

    # =========================================================================
    # Game-specific drawing
    # =========================================================================

    @abstractmethod
    def render_background(self, screen: pygame.Surface, hud: HudSnapshot) -> None:
        """Clear the screen and draw the backdrop."""
        pass

    @abstractmethod
    def render_obstacle(self, obstacle: Obstacle, screen: pygame.Surface) -> None:
        """Draw one obstacle."""
        pass

    # =========================================================================
    # Shared drawing
    # =========================================================================

    def update(self, dt: float) -> None:
        """Advance blink and toast timers."""
        self._clock += dt
        for toast in self._toasts:
            toast[1] -= dt
        self._toasts = [t for t in self._toasts if t[1] > 0]

    def show_events(self, events: List[GameEvent]) -> None:
        """Queue game events as short toasts."""
        for event in events:
            self._toasts.append([event.message, self.TOAST_SECONDS])
        self._toasts = self._toasts[-self.MAX_TOASTS:]

    def render_frame(self, frame: 'FrameSnapshot', screen: pygame.Surface) -> None:
        """Draw a whole FrameSnapshot."""
        self.render_background(screen, frame.hud)
        for obstacle in frame.obstacles:
            self.render_obstacle(obstacle, screen)
        for b in frame.bullets:
            self.render_bullet(b, screen)
        for b in frame.enemy_bullets:
            self.render_enemy_bullet(b, screen)
        for p in frame.particles:
            self.render_particle(p, screen)
        if frame.hud.state != "menu":
            self.render_ship(frame.ship, screen, frame.thrusting)
        self.render_hud(screen, frame.hud)
        self.render_toasts(screen)
        self.render_overlay(screen, frame.hud)

    def render_ship(self, ship: Ship, screen: pygame.Surface, thrusting: bool = False) -> None:
        """Arrowhead outline; blinks while invincible."""
        if ship.invincible > 0 and int(self._clock * 10) % 2:
            return

        r = ship.radius
        cos_a = math.cos(ship.angle)
        sin_a = math.sin(ship.angle)

        def to_screen(lx: float, ly: float) -> Tuple[float, float]:
            return (ship.x + lx * cos_a - ly * sin_a, ship.y + lx * sin_a + ly * cos_a)

        body = [to_screen(r, 0), to_screen(-r * 0.85, r * 0.7),
                to_screen(-r * 0.6, 0), to_screen(-r * 0.85, -r * 0.7)]
        pygame.draw.polygon(screen, self.LINE_COLOR, body, 2)

        if thrusting:
            flame = r * 1.2 + (self._clock * 53.0) % 8
            pygame.draw.line(screen, self.ACCENT_COLOR,
                             to_screen(-r * 0.75, 0), to_screen(-flame, 0), 2)

    def render_bullet(self, bullet: Bullet, screen: pygame.Surface) -> None:
        pygame.draw.circle(screen, self.ACCENT_COLOR, (int(bullet.x), int(bullet.y)), 2)

    def render_enemy_bullet(self, bullet: EnemyBullet, screen: pygame.Surface) -> None:
        pygame.draw.circle(screen, self.ENEMY_SHOT_COLOR,
                           (int(bullet.x), int(bullet.y)), int(bullet.radius))

    def render_particle(self, particle: Particle, screen: pygame.Surface) -> None:
        t = particle.life / particle.max_life if particle.max_life > 0 else 0.0
        color = fade(particle.color, t, self.BACKGROUND)
        screen.fill(color, (int(particle.x), int(particle.y), 2, 2))

    def render_hud(self, screen: pygame.Surface, hud: HudSnapshot) -> None:
        """Score and best on the left, lives on the right, progress in the middle."""
        self._ensure_font()

        score = self._font.render(f"Score: {hud.score}   Best: {hud.best_score}", True, self.HUD_COLOR)
        screen.blit(score, (12, 10))

        lives = self._font.render(f"Lives: {hud.lives}", True, self.HUD_COLOR)
        lives_rect = lives.get_rect()
        lives_rect.topright = (screen.get_width() - 12, 10)
        screen.blit(lives, lives_rect)

        progress = self._font.render(self.progress_text(hud), True, self.DIM_COLOR)
        progress_rect = progress.get_rect()
        progress_rect.midtop = (screen.get_width() // 2, 10)
        screen.blit(progress, progress_rect)

    def progress_text(self, hud: HudSnapshot) -> str:
        return f"Level {hud.level}"

    def render_toasts(self, screen: pygame.Surface) -> None:
        if not self._toasts:
            return
        self._ensure_font()
        y = 44
        for message, remaining in self._toasts:
            color = fade(self.HUD_COLOR, min(1.0, remaining / 0.4), self.BACKGROUND)
            text = self._font.render(message, True, color)
            rect = text.get_rect()
            rect.midtop = (screen.get_width() // 2, y)
            screen.blit(text, rect)
            y += rect.height + 4

    def render_overlay(self, screen: pygame.Surface, hud: HudSnapshot) -> None:
        """Title, pause and end-of-run screens."""
        if hud.state == "playing":
            return

        self._ensure_font()
        cx = screen.get_width() // 2
        cy = screen.get_height() // 2

        if hud.state == "menu":
            title, lines = self.TITLE, self.HELP_LINES
        elif hud.state == "paused":
            title, lines = "PAUSED", ("Press P to resume",)
        elif hud.state == "won":
            title, lines = "VICTORY", (f"Score: {hud.score}", "Press Enter or tap to play again")
        else:
            title, lines = "GAME OVER", (f"Score: {hud.score}", "Press Enter or tap to play again")

        heading = self._big_font.render(title, True, self.LINE_COLOR)
        screen.blit(heading, heading.get_rect(center=(cx, cy - 40)))

        y = cy + 10
        for line in lines:
            text = self._font.render(line, True, self.DIM_COLOR)
            rect = text.get_rect(center=(cx, y))
            screen.blit(text, rect)
            y += rect.height + 6

    # =========================================================================
    # On-screen buttons
    # =========================================================================

    def render_buttons(
        self,
        screen: pygame.Surface,
        layout: Dict[Control, pygame.Rect],
        held: Set[Control],
    ) -> None:
        """Outline each touch button; held buttons are filled."""
        for control, rect in layout.items():
            color = self.ACCENT_COLOR if control in held else self.DIM_COLOR
            if control in held:
                pygame.draw.rect(screen, fade(color, 0.35, self.BACKGROUND), rect, border_radius=10)
            pygame.draw.rect(screen, color, rect, 2, border_radius=10)

            cx, cy = rect.center
            r = rect.width * 0.25
            if control is Control.FIRE:
                pygame.draw.circle(screen, color, (cx, cy), int(r), 2)
                continue
            glyph = {
                Control.LEFT: [(cx - r, cy), (cx + r, cy - r), (cx + r, cy + r)],
                Control.RIGHT: [(cx + r, cy), (cx - r, cy - r), (cx - r, cy + r)],
                Control.THRUST: [(cx, cy - r), (cx - r, cy + r), (cx + r, cy + r)],
            }[control]
            pygame.draw.polygon(screen, color, glyph, 2)
